import argparse
import logging
from typing import Optional, Sequence

from cardset.core.config import settings
from cardset.core.logging import setup_logging
from cardset.services.verifier import format_report, load_dataset, verify_dataset

logger = logging.getLogger(__name__)

DEFAULT_DATASET = "ecl.json"


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="List a downloaded set by collector number and check it for duplicate ids"
    )
    parser.add_argument("dataset", nargs="?", default=DEFAULT_DATASET, help="dataset json file")
    args = parser.parse_args(argv)

    setup_logging(settings.log_level)

    try:
        records = load_dataset(args.dataset)
    except (OSError, ValueError) as exc:
        logger.error("Could not read dataset %s: %s", args.dataset, exc)
        return 1

    for line in format_report(verify_dataset(records)):
        print(line)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
