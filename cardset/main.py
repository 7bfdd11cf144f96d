import argparse
import asyncio
import logging
import sys
from typing import Optional, Sequence

from cardset.core.config import Settings, settings
from cardset.core.logging import setup_logging
from cardset.services.dataset_builder import build_dataset

logger = logging.getLogger(__name__)

USAGE_BANNER = "\n".join(
    [
        "---------------------------------------------------------",
        "Please provide a set code as a command-line argument.",
        "Example: cardset-download tla",
        "---------------------------------------------------------",
    ]
)


def main(argv: Optional[Sequence[str]] = None, cfg: Optional[Settings] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Download card data and images for one set into <setcode>.json and images/<setcode>/"
    )
    parser.add_argument("set_code", nargs="?", help="set code, e.g. tla")
    # extra arguments are ignored, like the original script
    args, _ = parser.parse_known_args(argv)
    cfg = cfg or settings

    setup_logging(cfg.log_level)

    if not args.set_code:
        print(USAGE_BANNER, file=sys.stderr)
        return 0

    try:
        asyncio.run(build_dataset(args.set_code, cfg))
    except Exception as exc:
        logger.exception("An unexpected error occurred: %s", exc)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
