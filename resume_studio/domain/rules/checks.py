"""Rule functions for the ATS battery.

Each rule takes a :class:`DocumentView` and its params and returns the issues
it raises, in the order it finds them.
"""

from __future__ import annotations

import re
from typing import Any, Dict, List

from ..item_shapes import SectionType, item_bullets
from ..templates import HIGH_RISK_TEMPLATE_IDS
from .document_view import DocumentView
from .rule_runner import (
    COMPLETENESS,
    CONTENT_QUALITY,
    PARSEABILITY,
    STYLE,
    Issue,
    RuleFn,
    Severity,
)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

WEAK_PHRASES = ["helped", "assisted", "handled", "worked on", "responsible for", "tried to"]

BUZZWORDS = ["synergy", "disruptor", "world-class", "ninja", "rockstar", "guru", "passionate", "hard worker"]

# bare k, m and b match anywhere in the bullet, not only as words
METRIC_RE = re.compile(r"\d+|%|\$|k|m|b|improved|reduced|increased|growth|scale")

FIRST_PERSON_RE = re.compile(r"\b(i|me|my|we|us|our)\b", re.IGNORECASE)

# id -> (severity, category, title, explanation, impacted section, suggested fix)
ISSUE_CATALOG: Dict[str, tuple] = {
    "P01": (
        Severity.CRITICAL,
        PARSEABILITY,
        "Missing Contact: Email",
        "Recruiters and automated systems cannot reach you.",
        "Header",
        "Add a professional email address.",
    ),
    "P02": (
        Severity.HIGH,
        PARSEABILITY,
        "Missing Contact: Phone",
        "Phone number is a vital identifier for HR systems.",
        "Header",
        "Include your primary phone number.",
    ),
    "P03": (
        Severity.CRITICAL,
        PARSEABILITY,
        "Missing Identity: Full Name",
        "The document lacks a primary identifier.",
        "Header",
        "Enter your full legal name.",
    ),
    "P04": (
        Severity.MEDIUM,
        PARSEABILITY,
        "No LinkedIn Found",
        "Modern ATS use LinkedIn for identity verification and profile enrichment.",
        "Header",
        "Include your LinkedIn profile link.",
    ),
    "P05": (
        Severity.HIGH,
        PARSEABILITY,
        "High-Risk Template Detected",
        "Graphic-heavy or non-standard layouts often break older legacy parsers.",
        "Design",
        'Switch to a "Safe" category template for portal submissions.',
    ),
    "P06": (
        Severity.LOW,
        PARSEABILITY,
        "Unsecured Links",
        "Use of non-HTTPS links can be flagged as a security risk by some firewalls.",
        "Links",
        "Update all links to use HTTPS.",
    ),
    "C01": (
        Severity.HIGH,
        CONTENT_QUALITY,
        "Insufficient Experience Entries",
        "Listing fewer than two roles suggests a thin professional history.",
        "Experience",
        "Add more professional roles or project work.",
    ),
    "C02": (
        Severity.MEDIUM,
        CONTENT_QUALITY,
        "Thin Bullet Count",
        "Your most recent role should have at least 3-5 high-impact bullets.",
        "Experience",
        "Expand on your achievements in this role.",
    ),
    "C03": (
        Severity.LOW,
        CONTENT_QUALITY,
        "Excessive Bullet Length",
        "Paragraph-style bullets are harder for parsers to extract key skills from.",
        "Experience",
        "Break this bullet into two separate achievements.",
    ),
    "C04": (
        Severity.LOW,
        CONTENT_QUALITY,
        "Bullet Too Brief",
        "Very short bullets lack the context needed to prove impact.",
        "Experience",
        "Use the XYZ formula: Accomplished [X] as measured by [Y], by doing [Z].",
    ),
    "C05": (
        Severity.MEDIUM,
        CONTENT_QUALITY,
        "Non-Quantified Achievement",
        "ATS and recruiters prioritize data-driven results over task descriptions.",
        "Experience",
        "Add numbers, percentages, or currency values to this bullet.",
    ),
    "C06": (
        Severity.LOW,
        CONTENT_QUALITY,
        "Passive Language Detected",
        "Passive verbs diminish the perceived ownership of your work.",
        "Experience",
        'Replace with "Spearheaded", "Orchestrated", or "Executed".',
    ),
    "CO01": (
        Severity.MEDIUM,
        COMPLETENESS,
        "Summary Lacks Depth",
        "A weak summary misses the first opportunity for keyword matching.",
        "Summary",
        'Write 3-4 impactful sentences highlighting your specific "Unique Selling Point".',
    ),
    "CO02": (
        Severity.HIGH,
        COMPLETENESS,
        "Low Keyword Density",
        "Skills are the primary filter for ATS algorithms. You need more topical keywords.",
        "Skills",
        "List at least 10-15 relevant technical and industry skills.",
    ),
    "CO03": (
        Severity.HIGH,
        COMPLETENESS,
        "Missing Academic History",
        "Most enterprise roles require verification of education levels.",
        "Education",
        "Add your degree or most recent certification.",
    ),
    "CO04": (
        Severity.LOW,
        COMPLETENESS,
        "No Applied Evidence (Projects)",
        "You list many skills but no project work to prove application.",
        "Projects",
        "Add a Projects section to showcase hands-on work.",
    ),
    "S01": (
        Severity.MEDIUM,
        STYLE,
        "First-Person Pronouns Found",
        "Standard professional resumes should use third-person implied (omitted) pronouns.",
        "Global",
        'Remove "I", "me", and "my" from your descriptions.',
    ),
    "S02": (
        Severity.LOW,
        STYLE,
        "Buzzword Overload",
        "Vague buzzwords occupy valuable space and offer zero proof of competency.",
        "Global",
        "Replace vague buzzwords with a concrete skill or achievement.",
    ),
}


def make_issue(issue_id: str, **overrides: Any) -> Issue:
    severity, category, title, explanation, impacted, fix = ISSUE_CATALOG[issue_id]
    fields = {
        "id": issue_id,
        "severity": severity,
        "category": category,
        "title": title,
        "explanation": explanation,
        "impacted_section": impacted,
        "suggested_fix": fix,
    }
    fields.update(overrides)
    return Issue(**fields)


# ---------------------------------------------------------------------------
# Parse-ability
# ---------------------------------------------------------------------------


def _rule_contact_email(view: DocumentView, params: Dict[str, Any]) -> List[Issue]:
    return [] if view.document.basics.email else [make_issue("P01")]


def _rule_contact_phone(view: DocumentView, params: Dict[str, Any]) -> List[Issue]:
    return [] if view.document.basics.phone else [make_issue("P02")]


def _rule_identity_name(view: DocumentView, params: Dict[str, Any]) -> List[Issue]:
    return [] if view.document.basics.name else [make_issue("P03")]


def _rule_linkedin_profile(view: DocumentView, params: Dict[str, Any]) -> List[Issue]:
    has_profile = any("linkedin" in p.network.lower() for p in view.document.basics.profiles)
    if has_profile or "linkedin.com" in view.text:
        return []
    return [make_issue("P04")]


def _rule_template_risk(view: DocumentView, params: Dict[str, Any]) -> List[Issue]:
    risky = params.get("high_risk_templates", HIGH_RISK_TEMPLATE_IDS)
    return [make_issue("P05")] if view.settings.template_id in risky else []


def _rule_secure_links(view: DocumentView, params: Dict[str, Any]) -> List[Issue]:
    if "http://" in view.text and "https://" not in view.text:
        return [make_issue("P06")]
    return []


# ---------------------------------------------------------------------------
# Content quality
# ---------------------------------------------------------------------------


def _rule_experience_depth(view: DocumentView, params: Dict[str, Any]) -> List[Issue]:
    section = view.experience
    if section is None:
        return []

    min_items = int(params.get("min_items", 2))
    min_recent_bullets = int(params.get("min_recent_bullets", 3))

    issues: List[Issue] = []
    if len(section.items) < min_items:
        issues.append(make_issue("C01"))
    if section.items:
        recent = section.items[0]
        if len(item_bullets(recent)) < min_recent_bullets:
            company = getattr(recent, "company", None) or ""
            issues.append(make_issue("C02", title=f"Thin Bullet Count: {company}"))
    return issues


def _rule_experience_bullets(view: DocumentView, params: Dict[str, Any]) -> List[Issue]:
    max_chars = int(params.get("max_chars", 250))
    min_chars = int(params.get("min_chars", 30))

    issues: List[Issue] = []
    for bullet in view.experience_bullets():
        lowered = bullet.lower()
        if len(bullet) > max_chars:
            issues.append(make_issue("C03"))
        if len(bullet) < min_chars:
            issues.append(make_issue("C04"))
        if not METRIC_RE.search(lowered):
            issues.append(make_issue("C05"))
        if any(phrase in lowered for phrase in WEAK_PHRASES):
            issues.append(make_issue("C06"))
    return issues


# ---------------------------------------------------------------------------
# Completeness
# ---------------------------------------------------------------------------


def _rule_summary_depth(view: DocumentView, params: Dict[str, Any]) -> List[Issue]:
    min_chars = int(params.get("min_chars", 80))
    summary = view.document.basics.summary
    if not summary or len(summary) < min_chars:
        return [make_issue("CO01")]
    return []


def _rule_skill_density(view: DocumentView, params: Dict[str, Any]) -> List[Issue]:
    min_skills = int(params.get("min_skills", 8))
    return [make_issue("CO02")] if view.total_skills() < min_skills else []


def _rule_education_history(view: DocumentView, params: Dict[str, Any]) -> List[Issue]:
    section = view.visible_section(SectionType.EDUCATION)
    if section is None or not section.items:
        return [make_issue("CO03")]
    return []


def _rule_project_evidence(view: DocumentView, params: Dict[str, Any]) -> List[Issue]:
    skill_threshold = int(params.get("skill_threshold", 15))
    if view.visible_section(SectionType.PROJECTS) is None and view.total_skills() > skill_threshold:
        return [make_issue("CO04")]
    return []


# ---------------------------------------------------------------------------
# Style
# ---------------------------------------------------------------------------


def _rule_first_person(view: DocumentView, params: Dict[str, Any]) -> List[Issue]:
    return [make_issue("S01")] if FIRST_PERSON_RE.search(view.text) else []


def _rule_buzzwords(view: DocumentView, params: Dict[str, Any]) -> List[Issue]:
    max_buzzwords = int(params.get("max_buzzwords", 2))
    found = [word for word in BUZZWORDS if word in view.text]
    if len(found) <= max_buzzwords:
        return []
    return [make_issue("S02", suggested_fix=f'Replace "{found[0]}" with a concrete skill or achievement.')]


RULE_REGISTRY: Dict[str, RuleFn] = {
    "contact_email": _rule_contact_email,
    "contact_phone": _rule_contact_phone,
    "identity_name": _rule_identity_name,
    "linkedin_profile": _rule_linkedin_profile,
    "template_risk": _rule_template_risk,
    "secure_links": _rule_secure_links,
    "experience_depth": _rule_experience_depth,
    "experience_bullets": _rule_experience_bullets,
    "summary_depth": _rule_summary_depth,
    "skill_density": _rule_skill_density,
    "education_history": _rule_education_history,
    "project_evidence": _rule_project_evidence,
    "first_person": _rule_first_person,
    "buzzwords": _rule_buzzwords,
}
