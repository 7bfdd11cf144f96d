import pytest

from cardset.core.config import Settings


def make_card(cid: str, number: str, name: str | None = None, faces: int = 0, **extra) -> dict:
    card = {
        "object": "card",
        "id": cid,
        "name": name or f"Card {cid}",
        "collector_number": number,
        "set": "tla",
    }
    if faces:
        card["card_faces"] = [
            {"name": f"{cid} face {i}", "image_uris": {"normal": f"https://img.test/{cid}/{i}.jpg"}}
            for i in range(faces)
        ]
    else:
        card["image_uris"] = {"normal": f"https://img.test/{cid}.jpg"}
    card.update(extra)
    return card


@pytest.fixture
def cfg(tmp_path) -> Settings:
    return Settings(
        api_base_url="https://api.test",
        images_dir=str(tmp_path / "images"),
        output_dir=str(tmp_path),
        rate_limit_delay=0,
    )
