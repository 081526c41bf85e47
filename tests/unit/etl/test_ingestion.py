"""
Unit tests for job description and resume ingestion.
"""
import asyncio
import json

import pytest

from core.exceptions import ParseError, ValidationError
from etl.ingestion import IngestionService, merge_job_draft


class TestMergeJobDraft:
    def test_draft_wins_except_where_empty(self):
        form = {"title": "Typed", "location": "Berlin", "required_skills": ["SQL"]}
        draft = {"title": "Parsed", "location": "", "required_skills": [], "salary_band": None, "department": "Data"}

        merged = merge_job_draft(form, draft)

        assert merged == {"title": "Parsed", "location": "Berlin", "required_skills": ["SQL"], "department": "Data"}

    def test_form_not_mutated(self):
        form = {"title": "Typed"}
        merge_job_draft(form, {"title": "Parsed"})
        assert form == {"title": "Typed"}


class TestParseJobDescription:
    def test_draft_keeps_known_fields_and_description(self, provider, oracle):
        provider.queue("parse_job", {
            "title": "Data Engineer",
            "requiredSkills": ["Python", "SQL"],
            "minYearsExperience": 3,
            "unexpected": "dropped",
        })

        draft = asyncio.run(IngestionService(oracle).parse_job_description("We need a data engineer."))

        assert draft["title"] == "Data Engineer"
        assert draft["required_skills"] == ["Python", "SQL"]
        assert draft["min_years_experience"] == 3
        assert draft["description"] == "We need a data engineer."
        assert "unexpected" not in draft

    def test_empty_text_rejected_before_oracle(self, provider, oracle):
        with pytest.raises(ValidationError):
            asyncio.run(IngestionService(oracle).parse_job_description("  "))
        assert provider.calls == []

    @pytest.mark.parametrize("reply", [
        {"required_skills": ["Go"]},
        {"title": "Engineer"},
        {"title": "Engineer", "required_skills": "Go"},
        "Sorry, I can't parse that.",
    ])
    def test_unusable_reply_raises_parse_error(self, provider, oracle, reply):
        provider.queue("parse_job", reply)

        with pytest.raises(ParseError):
            asyncio.run(IngestionService(oracle).parse_job_description("Some job"))


class TestParseResume:
    def test_text_resume_goes_through_oracle(self, provider, oracle):
        provider.queue("parse_resume", {"name": "Ada", "skills": ["Go"], "totalYearsExperience": 5})

        fields = asyncio.run(IngestionService(oracle).parse_resume(b"Ada. Go developer.", "ada.txt"))

        assert fields == {
            "name": "Ada",
            "skills": ["Go"],
            "total_years_experience": 5,
            "raw_text": "Document: ada.txt",
        }
        assert "Source file: ada.txt" in provider.calls_for("parse_resume")[0][2]

    def test_structured_resume_skips_oracle(self, provider, oracle):
        content = json.dumps({"name": "Ada", "skills": ["Go"], "yearsOfExperience": 2}).encode("utf-8")

        fields = asyncio.run(IngestionService(oracle).parse_resume(content, "ada.json"))

        assert fields["name"] == "Ada"
        assert fields["skills"] == ["Go"]
        assert provider.calls == []

    def test_structured_resume_without_skills_uses_oracle(self, provider, oracle):
        provider.queue("parse_resume", {"name": "Ada", "skills": ["Go"]})

        asyncio.run(IngestionService(oracle).parse_resume(b"name: Ada\n", "ada.yaml"))

        assert len(provider.calls_for("parse_resume")) == 1

    def test_unreadable_file_is_validation_error(self, provider, oracle):
        with pytest.raises(ValidationError, match="Unsupported"):
            asyncio.run(IngestionService(oracle).parse_resume(b"x", "cv.rtf"))
        assert provider.calls == []

    def test_malformed_reply_is_parse_error(self, provider, oracle):
        provider.queue("parse_resume", "Here's the resume: name Ada")

        with pytest.raises(ParseError):
            asyncio.run(IngestionService(oracle).parse_resume(b"Ada", "ada.txt"))
