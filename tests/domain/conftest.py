"""Pytest configuration for domain package tests."""

import pytest

from resume_studio.domain.document import ResumeDocument, TemplateSettings

SUMMARY = (
    "Platform engineer building reliable distributed systems, data pipelines, and developer "
    "tooling for global payment products. "
) * 2

SKILLS = [
    "Python", "Go", "Kafka", "Kubernetes", "Terraform",
    "PostgreSQL", "Redis", "Docker", "gRPC", "GraphQL",
    "AWS", "GCP", "Linux", "Bash", "Prometheus",
    "Grafana", "Spark", "Airflow", "React", "TypeScript",
]


def _quantified_bullets(company: str):
    return [
        f"Cut p99 latency at {company} by 45% across 12 services serving 3M requests daily.",
        f"Shipped 30 production releases at {company} with zero rollbacks over 18 months.",
        f"Reduced cloud spend at {company} by $240K per year through rightsizing 400 nodes.",
        f"Grew automated test coverage at {company} from 52% to 91% for 8 core packages.",
    ]


@pytest.fixture
def strong_document() -> ResumeDocument:
    """Document that trips no rule at all."""
    companies = ["Northwind", "Contoso", "Fabrikam"]
    return ResumeDocument.model_validate(
        {
            "basics": {
                "name": "Jane Doe",
                "label": "Staff Platform Engineer",
                "email": "jane.doe@example.com",
                "phone": "+1 555 010 2000",
                "url": "https://janedoe.dev",
                "summary": SUMMARY[:200],
                "location": "Austin, TX",
                "profiles": [
                    {"network": "LinkedIn", "username": "janedoe", "url": "https://linkedin.com/in/janedoe"}
                ],
            },
            "sections": [
                {
                    "id": "sec-exp",
                    "type": "experience",
                    "title": "Experience",
                    "items": [
                        {
                            "id": f"item-{idx}",
                            "company": company,
                            "role": "Platform Engineer",
                            "start_date": f"Jan 20{15 + idx}",
                            "end_date": f"Dec 20{16 + idx}",
                            "bullets": _quantified_bullets(company),
                        }
                        for idx, company in enumerate(companies)
                    ],
                },
                {
                    "id": "sec-edu",
                    "type": "education",
                    "title": "Education",
                    "items": [
                        {"id": "edu-1", "institution": "State University", "degree": "B.S. Computer Science"}
                    ],
                },
                {
                    "id": "sec-skills",
                    "type": "skills",
                    "title": "Skills",
                    "items": [{"id": "sk-1", "name": "Engineering", "skills": SKILLS}],
                },
                {
                    "id": "sec-proj",
                    "type": "projects",
                    "title": "Projects",
                    "items": [
                        {
                            "id": "proj-1",
                            "name": "Open Source Scheduler",
                            "bullets": ["Maintained a scheduler with 2,000 GitHub stars."],
                        }
                    ],
                },
            ],
        }
    )


@pytest.fixture
def weak_document() -> ResumeDocument:
    """No email, no phone, one thin experience entry."""
    return ResumeDocument.model_validate(
        {
            "basics": {"name": "John Roe", "summary": ""},
            "sections": [
                {
                    "id": "sec-exp",
                    "type": "experience",
                    "title": "Experience",
                    "items": [
                        {
                            "id": "item-1",
                            "company": "Acme",
                            "role": "Engineer",
                            "bullets": ["Helped with stuff", "Helped with stuff"],
                        }
                    ],
                }
            ],
        }
    )


@pytest.fixture
def safe_settings() -> TemplateSettings:
    return TemplateSettings(template_id="minimalist")
