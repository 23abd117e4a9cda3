from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ResumeContact(BaseModel):
    name: str = ""
    location: str = ""
    phone: str = ""
    email: str = ""
    linkedin: str = ""
    github: str = ""


class ResumeExperience(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    title: str = ""
    company: str = ""
    start_date: str = ""
    end_date: str = ""
    location: str = ""
    description: str = ""
    achievements: list[str] = Field(default_factory=list)
    technologies: list[str] = Field(default_factory=list)


class ResumeEducation(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    degree: str = ""
    institution: str = ""
    location: str | None = None
    graduation_date: str | None = None
    honors: str | None = None


class ResumeCertification(BaseModel):
    name: str = ""
    issuer: str = ""
    date: str | None = None
    url: str | None = None


class ResumeLanguage(BaseModel):
    language: str = ""
    proficiency: str = ""


class ResumePatent(BaseModel):
    title: str = ""
    number: str = ""
    date: str = ""


class ParsedResume(BaseModel):
    contact: ResumeContact = Field(default_factory=ResumeContact)
    summary: str = ""
    skills: dict[str, list[str]] = Field(default_factory=dict)
    experience: list[ResumeExperience] = Field(default_factory=list)
    education: list[ResumeEducation] = Field(default_factory=list)
    certifications: list[ResumeCertification] = Field(default_factory=list)
    languages: list[ResumeLanguage] = Field(default_factory=list)
    patents: list[ResumePatent] = Field(default_factory=list)


class ResumeSummary(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    summary: str
    key_skills: list[str]
    years_of_experience: int
    current_role: str
    languages: list[str]
