"""Topic labels and the topic-keyed "why it matters" defaults."""

from __future__ import annotations

TOPIC_LABELS = {
    "basics": "Basics",
    "ancillary": "Ancillary",
    "funding": "Funding",
    "compliance": "Compliance",
    "sales": "Sales",
    "mixed": "Mixed",
}

_DEFAULT_RATIONALE = {
    "basics": "Grasping core plan mechanics builds confidence during enrollment and care decisions.",
    "ancillary": "Ancillary benefits strengthen total rewards and support preventive well-being.",
    "funding": "Funding choices shape risk tolerance, cash flow, and long-term cost control.",
    "compliance": "Compliance protects the organization from penalties and safeguards employees.",
    "sales": "Consultative strategy improves adoption, value, and retention.",
}
_GENERIC_RATIONALE = "This concept connects directly to real-world coverage, cost, and employee experience."


def default_rationale(topic: str) -> str:
    return _DEFAULT_RATIONALE.get(topic, _GENERIC_RATIONALE)


def topic_label(topic: str) -> str:
    return TOPIC_LABELS.get(topic, topic.title())
