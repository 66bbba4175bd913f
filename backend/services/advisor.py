# backend/services/advisor.py
"""Prompts for the flower advisor. Works on read-only FlowerView snapshots only."""

from schemas.flower import FlowerView
from services.errors import ValidationRejected

TOPICS = ("care", "arrangement", "sales")


def build_prompt(flower: FlowerView, topic: str) -> str:
    if topic == "care":
        return (
            f"Provide concise care instructions for a {flower.name}. Include watering, "
            "light requirements, and how to extend shelf life. Max 100 words."
        )
    if topic == "arrangement":
        return (
            f"Suggest 3 flowers that go well with {flower.name} in a bouquet "
            "and briefly explain why. Max 100 words."
        )
    if topic == "sales":
        return f"Give me a one-sentence sales pitch for a {flower.name} priced at ${flower.price:.2f}."
    raise ValidationRejected(f"Unknown advice topic: {topic}")


async def ask_advisor(client, flower: FlowerView, topic: str) -> str:
    return await client.generate(build_prompt(flower, topic))
