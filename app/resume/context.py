from __future__ import annotations

import logging
import re

from app.resume.parser import ResumeDataError, load_resume
from app.schemas.resume import ParsedResume

logger = logging.getLogger(__name__)

RESUME_UNAVAILABLE = "Resume data not available"

_CAMEL_BOUNDARY = re.compile(r"([A-Z])")

_cached_context: str | None = None


def _category_name(category: str) -> str:
    spaced = _CAMEL_BOUNDARY.sub(r" \1", category.replace("_", " "))
    return re.sub(r"\s+", " ", spaced).strip()


def render_resume_context(resume: ParsedResume) -> str:
    """Flatten the parsed resume into the text block embedded in system prompts."""
    parts: list[str] = []

    contact = resume.contact
    parts.append("**Contact Information:**")
    parts.append(f"Name: {contact.name}")
    if contact.location:
        parts.append(f"Location: {contact.location}")
    if contact.email:
        parts.append(f"Email: {contact.email}")
    if contact.phone:
        parts.append(f"Phone: {contact.phone}")
    if contact.linkedin:
        parts.append(f"LinkedIn: {contact.linkedin}")
    if contact.github:
        parts.append(f"GitHub: {contact.github}")
    parts.append("")

    if resume.summary:
        parts.append("**Professional Summary:**")
        parts.append(resume.summary)
        parts.append("")

    skill_lines = [
        f"{_category_name(category)}: {', '.join(skills)}"
        for category, skills in resume.skills.items()
        if skills
    ]
    if skill_lines:
        parts.append("**Skills:**")
        parts.extend(skill_lines)
        parts.append("")

    if resume.experience:
        parts.append("**Work Experience:**")
        for job in resume.experience:
            parts.append(f"\n{job.title} at {job.company}")
            parts.append(f"{job.start_date} - {job.end_date or 'Present'}")
            if job.location:
                parts.append(f"Location: {job.location}")
            if job.description:
                parts.append(job.description)
            if job.achievements:
                parts.append("Key Achievements:")
                parts.extend(f"- {achievement}" for achievement in job.achievements)
            if job.technologies:
                parts.append(f"Technologies: {', '.join(job.technologies)}")
        parts.append("")

    if resume.education:
        parts.append("**Education:**")
        for edu in resume.education:
            parts.append(f"{edu.degree} - {edu.institution}")
            if edu.graduation_date:
                parts.append(f"Graduated: {edu.graduation_date}")
            if edu.honors:
                parts.append(f"Honors: {edu.honors}")
        parts.append("")

    if resume.certifications:
        parts.append("**Certifications:**")
        for cert in resume.certifications:
            suffix = f", {cert.date}" if cert.date else ""
            parts.append(f"- {cert.name} ({cert.issuer}){suffix}")
        parts.append("")

    if resume.languages:
        parts.append("**Languages:**")
        parts.extend(f"- {lang.language}: {lang.proficiency}" for lang in resume.languages)
        parts.append("")

    if resume.patents:
        parts.append("**Patents and Publications:**")
        for patent in resume.patents:
            details = ", ".join(item for item in (patent.number, patent.date) if item)
            parts.append(f"- {patent.title} ({details})" if details else f"- {patent.title}")
        parts.append("")

    return "\n".join(parts)


def get_resume_context() -> str:
    global _cached_context

    if _cached_context is not None:
        return _cached_context

    try:
        resume = load_resume()
    except ResumeDataError as exc:
        logger.error("resume_context_unavailable: %s", exc)
        return RESUME_UNAVAILABLE

    _cached_context = render_resume_context(resume)
    return _cached_context


def reset_resume_context_cache() -> None:
    global _cached_context
    _cached_context = None
    load_resume.cache_clear()
