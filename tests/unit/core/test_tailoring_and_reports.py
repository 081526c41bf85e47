"""
Unit tests for tailoring, talent reports, the resume builder and the assistant.
"""
import asyncio

import pytest

from core.assistant_service import FALLBACK_REPLY, AssistantContext, AssistantService
from core.exceptions import ReportGenerationError, TailoringError, ValidationError
from core.models import Candidate, Experience, Job, ResumeBuilderData
from core.report_service import ReportService, build_report
from core.scorer import CandidateScore, MatchStatus, ScoreBreakdown
from core.tailoring_service import TailoringService
from pipeline.aggregator import PipelineEntry
from tests.mocks.oracle_mocks import report_reply, tailor_reply

JOB = Job(id="job-1", title="Engineer", required_skills=["Go"])
CANDIDATE = Candidate(
    id="cand-1",
    name="Ada",
    skills=["Go", "Rust", "SQL", "Docker", "Kafka", "Redis", "gRPC"],
    experience=[Experience(title="Engineer", company="Acme")],
)


def _entry(overall=88):
    score = CandidateScore(
        candidate_id=CANDIDATE.id,
        job_id=JOB.id,
        score=ScoreBreakdown(overall_score=overall),
        status=MatchStatus.TOP_FIT,
        analysis="Strong Go background",
    )
    return PipelineEntry(rank=1, candidate=CANDIDATE, score=score)


class TestTailoring:
    def test_tailor_builds_suggestion(self, provider, oracle):
        provider.queue("tailor", tailor_reply())

        result = asyncio.run(TailoringService(oracle).tailor(CANDIDATE, JOB))

        assert result.candidate_id == "cand-1"
        assert result.job_id == "job-1"
        assert result.suggested_summary.startswith("Backend engineer")
        assert result.optimized_experience[0].original_title == "Engineer"
        assert result.optimized_experience[0].suggested_bullets == ["Built Go microservices handling 10k rps"]

    def test_missing_summary_raises(self, provider, oracle):
        provider.queue("tailor", {"optimized_experience": [], "justification": "x"})

        with pytest.raises(TailoringError):
            asyncio.run(TailoringService(oracle).tailor(CANDIDATE, JOB))

    def test_unparseable_reply_raises(self, provider, oracle):
        provider.queue("tailor", "not json")

        with pytest.raises(TailoringError):
            asyncio.run(TailoringService(oracle).tailor(CANDIDATE, JOB))

    def test_wrong_typed_bullets_raise(self, provider, oracle):
        reply = tailor_reply()
        reply["optimized_experience"][0]["suggested_bullets"] = 5
        provider.queue("tailor", reply)

        with pytest.raises(TailoringError, match="suggested_bullets"):
            asyncio.run(TailoringService(oracle).tailor(CANDIDATE, JOB))

    def test_wrong_typed_experience_raises(self, provider, oracle):
        reply = tailor_reply()
        reply["optimized_experience"] = "Engineer"
        provider.queue("tailor", reply)

        with pytest.raises(TailoringError, match="optimized_experience"):
            asyncio.run(TailoringService(oracle).tailor(CANDIDATE, JOB))

    def test_single_bullet_string_kept_whole(self, provider, oracle):
        reply = tailor_reply()
        reply["optimized_experience"][0]["suggested_bullets"] = "Shipped the billing service"
        provider.queue("tailor", reply)

        result = asyncio.run(TailoringService(oracle).tailor(CANDIDATE, JOB))

        assert result.optimized_experience[0].suggested_bullets == ["Shipped the billing service"]


class TestReports:
    def test_empty_pipeline_makes_no_oracle_call(self, provider, oracle):
        with pytest.raises(ValidationError, match="No candidates"):
            asyncio.run(ReportService(oracle).generate(JOB, []))
        assert provider.calls == []

    def test_report_uses_report_model_and_top_five_skills(self, provider, oracle):
        provider.queue("report", report_reply(health=72))

        report = asyncio.run(ReportService(oracle).generate(JOB, [_entry()]))

        assert report.pipeline_health_score == 72
        assert report.strengths == ["Deep Go experience"]
        assert provider.models == ["report-model"]
        _, _, user_message = provider.calls_for("report")[0]
        assert '"Kafka"' in user_message
        assert '"Redis"' not in user_message

    def test_health_clamped(self):
        assert build_report(report_reply(health=140), "job-1").pipeline_health_score == 100
        assert build_report(report_reply(health=-3), "job-1").pipeline_health_score == 0

    def test_missing_fields_raise(self):
        data = report_reply()
        del data["recommendation"]
        with pytest.raises(ReportGenerationError, match="recommendation"):
            build_report(data, "job-1")

    def test_non_numeric_health_raises(self):
        with pytest.raises(ReportGenerationError):
            build_report(report_reply(health="great"), "job-1")

    def test_wrong_typed_strengths_raise(self):
        data = report_reply()
        data["strengths"] = 5
        with pytest.raises(ReportGenerationError, match="Malformed list field"):
            build_report(data, "job-1")

    def test_single_string_weakness_kept_whole(self):
        data = report_reply()
        data["weaknesses"] = "Little cloud exposure"
        assert build_report(data, "job-1").weaknesses == ["Little cloud exposure"]


class TestResumeBuilder:
    def test_enhance_returns_polished_text(self, provider, oracle):
        provider.queue("enhance", "  Led a team of five engineers.  ")

        text = asyncio.run(TailoringService(oracle).enhance_content("experience", "led team"))

        assert text == "Led a team of five engineers."

    def test_enhance_falls_back_to_input_on_empty_reply(self, provider, oracle):
        provider.queue("enhance", "   ")

        assert asyncio.run(TailoringService(oracle).enhance_content("summary", "My summary")) == "My summary"

    @pytest.mark.parametrize("kind,content", [("cover_letter", "x"), ("summary", ""), ("summary", "   ")])
    def test_enhance_validation(self, provider, oracle, kind, content):
        with pytest.raises(ValidationError):
            asyncio.run(TailoringService(oracle).enhance_content(kind, content))
        assert provider.calls == []

    def test_builder_merge_keeps_fields_the_oracle_omits(self, provider, oracle):
        provider.queue("builder", {"summary": "Go engineer", "skills": ["Go", "Kubernetes"], "email": "", "experience": []})
        draft = ResumeBuilderData(
            name="Ada",
            email="ada@example.com",
            summary="Engineer",
            skills=["Go"],
            experience=[Experience(title="Engineer", company="Acme", description="Built things")],
        )

        result = asyncio.run(TailoringService(oracle).tailor_builder_data(draft, "Senior Go engineer, Kubernetes"))

        assert result.summary == "Go engineer"
        assert result.skills == ["Go", "Kubernetes"]
        assert result.name == "Ada"
        assert result.email == "ada@example.com"
        assert result.experience[0].company == "Acme"

    def test_builder_requires_job_description(self, provider, oracle):
        with pytest.raises(ValidationError):
            asyncio.run(TailoringService(oracle).tailor_builder_data(ResumeBuilderData(name="Ada"), " "))


class TestAssistant:
    def test_reply_passed_through(self, provider, oracle):
        provider.queue("chat", "You have 3 candidates.")

        reply = asyncio.run(AssistantService(oracle).ask("How many?", AssistantContext(pipeline_count=3)))

        assert reply == "You have 3 candidates."

    def test_empty_reply_falls_back(self, provider, oracle):
        provider.queue("chat", "")

        assert asyncio.run(AssistantService(oracle).ask("Hello?", AssistantContext())) == FALLBACK_REPLY

    def test_empty_query_rejected(self, oracle):
        with pytest.raises(ValidationError):
            asyncio.run(AssistantService(oracle).ask("  ", AssistantContext()))
