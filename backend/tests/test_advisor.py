import pytest

from services.advisor import build_prompt
from services.errors import ValidationRejected
from services.inventory import to_view


def test_prompts_use_flower_details(make_flower):
    view = to_view(make_flower(name="Red Rose", price=5))
    assert "care instructions for a Red Rose" in build_prompt(view, "care")
    assert "go well with Red Rose" in build_prompt(view, "arrangement")
    assert build_prompt(view, "sales").endswith("priced at $5.00.")
    with pytest.raises(ValidationRejected):
        build_prompt(view, "poetry")


def test_advice_without_api_key_is_503(logged_in):
    resp = logged_in.post("/flowers/1/advice", json={"topic": "care"})
    assert resp.status_code == 503


def test_advice_gets_read_only_view(logged_in, monkeypatch):
    import routes.flowers

    seen = {}

    class FakeClient:
        async def generate(self, prompt):
            seen["prompt"] = prompt
            return "Keep them cool."

    monkeypatch.setattr(routes.flowers, "advisor_client", FakeClient())
    resp = logged_in.post("/flowers/3/advice", json={"topic": "sales"})

    assert resp.status_code == 200
    assert resp.json() == {"flower_id": "3", "topic": "sales", "text": "Keep them cool."}
    assert "Sunflower" in seen["prompt"]


def test_unknown_topic_is_422(logged_in):
    assert logged_in.post("/flowers/1/advice", json={"topic": "poetry"}).status_code == 422
