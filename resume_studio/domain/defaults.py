"""Canonical seed content for new resumes."""

from __future__ import annotations

from typing import Callable, Optional

from .document import ResumeDocument, TemplateSettings
from .item_shapes import SectionType

IdFactory = Callable[[str], str]

DEFAULT_TEMPLATE_ID = "minimalist"
DEFAULT_RESUME_TITLE = "New Resume"
DEFAULT_VERSION_NAME = "V1.0"
DEFAULT_FIELD_LABEL = "New Field"


def default_settings(template_id: Optional[str] = None) -> TemplateSettings:
    """Default template settings, with *template_id* overriding the template when given."""
    return TemplateSettings(template_id=template_id or DEFAULT_TEMPLATE_ID)


def default_document(new_id: IdFactory) -> ResumeDocument:
    """Sample document every new resume is seeded with.

    *new_id* receives an id prefix ("sec", "item") and returns a fresh id.
    """
    return ResumeDocument.model_validate(
        {
            "basics": {
                "name": "Dr. Jonathan J. Sterling",
                "label": "Principal Software Architect & Engineering Leader",
                "email": "j.sterling@enterprise-elite.pro",
                "phone": "+1 (555) 789-1011",
                "url": "https://sterling-architect.io",
                "summary": (
                    "Strategic technology leader with over 12 years of experience in architecting "
                    "high-availability distributed systems. Proven track record of leading "
                    "cross-functional engineering organizations of 50+ members. Expert in cloud-native "
                    "transformations, high-frequency trading infrastructure, and scaling series B-to-D "
                    "startups. Passionate about developer experience and operational excellence."
                ),
                "location": "Austin, TX",
                "profiles": [
                    {
                        "network": "LinkedIn",
                        "username": "jonathan-sterling",
                        "url": "https://linkedin.com/in/jonathan-sterling",
                    },
                    {
                        "network": "GitHub",
                        "username": "jsterl-architect",
                        "url": "https://github.com/jsterl-architect",
                    },
                ],
            },
            "sections": [
                {
                    "id": new_id("sec"),
                    "type": SectionType.EXPERIENCE,
                    "title": "Professional History",
                    "is_visible": True,
                    "items": [
                        {
                            "id": new_id("item"),
                            "company": "Quantum Systems Group",
                            "role": "Principal Solutions Architect",
                            "location": "San Francisco, CA",
                            "start_date": "Jan 2020",
                            "end_date": "Present",
                            "current": True,
                            "bullets": [
                                "Architected a globally distributed data processing engine using Go and "
                                "Kafka, reducing latency by 45% for 10M+ daily active users.",
                                "Spearheaded the migration of legacy monolith to microservices on "
                                "Kubernetes, resulting in a 30% reduction in cloud infrastructure costs.",
                                "Mentored 12+ senior engineers and established the company-wide Technical "
                                "Design Review (TDR) process.",
                                "Orchestrated a disaster recovery protocol that ensured 99.999% uptime "
                                "during the 2022 major region outage.",
                            ],
                        }
                    ],
                },
                {
                    "id": new_id("sec"),
                    "type": SectionType.EDUCATION,
                    "title": "Academic Foundation",
                    "is_visible": True,
                    "items": [
                        {
                            "id": new_id("item"),
                            "institution": "Massachusetts Institute of Technology (MIT)",
                            "degree": "Ph.D. in Computer Science",
                            "field": "Distributed Systems & AI",
                            "location": "Cambridge, MA",
                            "end_date": "May 2016",
                        }
                    ],
                },
                {
                    "id": new_id("sec"),
                    "type": SectionType.SKILLS,
                    "title": "Technical Arsenal",
                    "is_visible": True,
                    "items": [
                        {
                            "id": new_id("item"),
                            "name": "Core Architecture",
                            "skills": ["System Design", "Microservices", "Distributed Systems", "Cloud Native"],
                        }
                    ],
                },
            ],
        }
    )


def default_section_title(section_type: SectionType) -> str:
    """Type name with its first letter capitalized, e.g. ``custom`` -> ``Custom``."""
    value = section_type.value
    return value[:1].upper() + value[1:]
