"""
Technical-role heuristic.

A role counts as technical when any keyword appears anywhere in the role or
profile-field text. Plain substring matching: "sre" also hits inside longer
words, and no attempt is made to fix that here.
"""

TECHNICAL_ROLE_KEYWORDS = (
    "developer",
    "engineer",
    "scientist",
    "analyst",
    "architect",
    "programmer",
    "data",
    "software",
    "backend",
    "frontend",
    "fullstack",
    "flutter",
    "devops",
    "sre",
    "machine learning",
    "ai engineer",
    "cybersecurity",
    "network",
    "dba",
)


def is_technical_role(role_text: str, profile_field_text: str = "") -> bool:
    combined = f"{role_text or ''} {profile_field_text or ''}".lower()
    return any(keyword in combined for keyword in TECHNICAL_ROLE_KEYWORDS)
