"""Structured resume data as supplied by the resume content store."""

from models.schemas.base import CamelModel


class SkillCategory(CamelModel):
    category: str
    items: list[str] = []


class ExperienceEntry(CamelModel):
    title: str = ""
    company: str = ""
    highlights: list[str] = []


class EducationEntry(CamelModel):
    degree: str = ""
    institution: str = ""


class ResumeData(CamelModel):
    """Fields the scorer reads; anything else in the payload is ignored."""
    name: str = ""
    title: str = ""
    summary: str = ""
    years_experience: float | None = None
    team_size: str = ""  # free text, e.g. "13 engineers"
    skills: list[str] = []
    skills_by_category: list[SkillCategory] = []
    experiences: list[ExperienceEntry] = []
    education: list[EducationEntry] = []

    def all_skills(self) -> list[str]:
        """Flat and categorized skills, lowercased, first occurrence wins."""
        seen: dict[str, None] = {}
        for skill in self.skills:
            seen.setdefault(skill.lower(), None)
        for category in self.skills_by_category:
            for item in category.items:
                seen.setdefault(item.lower(), None)
        return list(seen)

    def highlights(self) -> list[str]:
        return [h for exp in self.experiences for h in exp.highlights if h.strip()]
