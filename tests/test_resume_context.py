import sys
import unittest
from datetime import date
from pathlib import Path
from unittest.mock import patch

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.resume import context as resume_context  # noqa: E402
from app.resume.parser import (  # noqa: E402
    ResumeDataError,
    build_resume_summary,
    calculate_years_of_experience,
    convert_resume,
    load_resume,
)

SAMPLE = {
    "personalInfo": {
        "name": "Sam Lee",
        "location": "Berlin",
        "email": "sam@example.com",
        "linkedin": "https://linkedin.example/sam",
    },
    "summary": "Platform product manager.",
    "skills": {
        "productManagement": ["Roadmapping", "Discovery"],
        "cloud_platforms": ["Azure"],
        "empty": [],
    },
    "experience": [
        {
            "title": "Lead PM",
            "company": "Acme",
            "startDate": "May 2020",
            "location": "Remote",
            "description": "Owned the data platform.",
            "achievements": ["Shipped exports", "Cut costs 30%"],
            "technologies": ["Python", "Kafka"],
        },
        {"title": "PM", "company": "Initech", "startDate": "June 2012", "endDate": "April 2020"},
    ],
    "education": [{"degree": "BSc Computer Science", "institution": "TU Berlin", "graduationDate": "2011"}],
    "certifications": [{"name": "CSPO", "issuer": "Scrum Alliance", "date": "2018"}],
    "languages": [{"language": "German", "proficiency": "Native"}],
    "publications": [{"title": "Stream Joins", "number": "US123", "date": "2019"}],
}


class ResumeParserTests(unittest.TestCase):
    def test_convert_maps_sections(self):
        resume = convert_resume(SAMPLE)

        self.assertEqual(resume.contact.name, "Sam Lee")
        self.assertEqual(resume.contact.phone, "")
        self.assertEqual(resume.experience[0].start_date, "May 2020")
        self.assertEqual(resume.experience[1].end_date, "April 2020")
        self.assertEqual(resume.education[0].graduation_date, "2011")
        self.assertEqual(resume.patents[0].number, "US123")

    def test_convert_defaults_missing_sections(self):
        resume = convert_resume({})
        self.assertEqual(resume.summary, "")
        self.assertEqual(resume.skills, {})
        self.assertEqual(resume.experience, [])

    def test_convert_rejects_bad_shape(self):
        with self.assertRaises(ResumeDataError):
            convert_resume({"experience": "not a list"})

    def test_load_missing_file(self):
        with self.assertRaises(ResumeDataError):
            load_resume("does/not/exist.json")

    def test_load_bundled_resume(self):
        resume = load_resume()
        self.assertTrue(resume.contact.name)
        self.assertGreater(len(resume.experience), 0)

    def test_years_of_experience(self):
        resume = convert_resume(SAMPLE)
        self.assertEqual(calculate_years_of_experience(resume, today=date(2025, 6, 1)), 13)
        self.assertEqual(calculate_years_of_experience(convert_resume({})), 0)

    def test_summary(self):
        summary = build_resume_summary(convert_resume(SAMPLE), today=date(2025, 6, 1))

        self.assertEqual(summary.key_skills, ["Roadmapping", "Discovery", "Azure"])
        self.assertEqual(summary.current_role, "Lead PM")
        self.assertEqual(summary.years_of_experience, 13)
        self.assertEqual(summary.languages, ["German: Native"])
        self.assertEqual(build_resume_summary(convert_resume({})).current_role, "Product Manager")


class ResumeContextTests(unittest.TestCase):
    def setUp(self):
        resume_context.reset_resume_context_cache()

    def tearDown(self):
        resume_context.reset_resume_context_cache()

    def test_render_includes_sections(self):
        text = resume_context.render_resume_context(convert_resume(SAMPLE))

        self.assertIn("**Contact Information:**\nName: Sam Lee", text)
        self.assertIn("Location: Berlin", text)
        self.assertNotIn("Phone:", text)
        self.assertIn("product Management: Roadmapping, Discovery", text)
        self.assertIn("cloud platforms: Azure", text)
        self.assertNotIn("empty:", text)
        self.assertIn("Lead PM at Acme\nMay 2020 - Present", text)
        self.assertIn("June 2012 - April 2020", text)
        self.assertIn("Key Achievements:\n- Shipped exports\n- Cut costs 30%", text)
        self.assertIn("Technologies: Python, Kafka", text)
        self.assertIn("BSc Computer Science - TU Berlin\nGraduated: 2011", text)
        self.assertIn("- CSPO (Scrum Alliance), 2018", text)
        self.assertIn("- German: Native", text)
        self.assertIn("- Stream Joins (US123, 2019)", text)

    def test_render_skips_empty_sections(self):
        text = resume_context.render_resume_context(convert_resume({"personalInfo": {"name": "X"}}))
        self.assertNotIn("**Skills:**", text)
        self.assertNotIn("**Work Experience:**", text)

    def test_context_is_cached(self):
        first = resume_context.get_resume_context()
        with patch.object(resume_context, "load_resume") as loader:
            second = resume_context.get_resume_context()
        loader.assert_not_called()
        self.assertIs(first, second)

    def test_context_unavailable_when_resume_fails(self):
        with patch.object(resume_context, "load_resume", side_effect=ResumeDataError("boom")):
            with self.assertLogs("app.resume.context", level="ERROR"):
                text = resume_context.get_resume_context()
        self.assertEqual(text, resume_context.RESUME_UNAVAILABLE)


if __name__ == "__main__":
    unittest.main()
