"""Tests for respondent helpers."""
import pytest

from survey_results.schemas.response import ResponseDraft
from survey_results.services.respondent_service import (
    SubmissionError, build_submission, has_responded, responded_survey_ids
)


class TestHasResponded:

    def test_matches_ignoring_case_and_spaces(self, make_response):
        responses = [make_response({}, respondent_id="  Ana@Example.com ")]

        assert has_responded(responses, "ana@example.com") is True

    def test_anonymous_responses_never_match(self, make_response):
        responses = [make_response({}), make_response({}, respondent_id="bo@example.com")]

        assert has_responded(responses, "ana@example.com") is False

    def test_blank_email_never_matches(self, make_response):
        assert has_responded([make_response({})], "  ") is False

    def test_duplicate_responses_are_independent(self, make_response):
        responses = [
            make_response({}, respondent_id="ana@example.com"),
            make_response({}, respondent_id="ANA@example.com"),
        ]

        assert has_responded(responses, "ana@example.com") is True

    def test_responded_survey_ids(self, make_response):
        snapshots = {
            "s1": [make_response({}, respondent_id="ana@example.com")],
            "s2": [make_response({}, respondent_id="bo@example.com")],
            "s3": [],
        }

        assert responded_survey_ids(snapshots, "Ana@example.com") == ["s1"]


class TestBuildSubmission:

    @pytest.fixture
    def survey(self, make_question, make_survey):
        return make_survey([
            make_question("recommend", options=["Yes", "No"], required=True, order=0),
            make_question("channels", type="checkbox", options=["Email", "Chat"], order=1),
            make_question("comments", type="text", order=2),
        ])

    def test_builds_payload_in_question_order(self, survey):
        draft = ResponseDraft(
            respondent_email=" ana@example.com ",
            answers={"comments": "Nice", "recommend": "Yes", "ghost": "x"},
        )

        submission = build_submission(survey, draft)

        assert submission.respondent_email == "ana@example.com"
        assert submission.model_dump(by_alias=True) == {
            "respondentEmail": "ana@example.com",
            "answers": [
                {"questionId": "recommend", "value": ["Yes"]},
                {"questionId": "channels", "value": []},
                {"questionId": "comments", "value": ["Nice"]},
            ],
        }

    def test_email_is_required(self, survey):
        with pytest.raises(SubmissionError):
            build_submission(survey, ResponseDraft(answers={"recommend": "Yes"}))

    @pytest.mark.parametrize("value", [None, "", [], ["  "]])
    def test_required_questions_must_be_answered(self, survey, value):
        draft = ResponseDraft(respondent_email="ana@example.com", answers={"recommend": value})

        with pytest.raises(SubmissionError) as exc_info:
            build_submission(survey, draft)

        assert exc_info.value.question_ids == ["recommend"]
