"""
Test cases for the typed result records.
"""

import unittest

from exambalm.core.models import (
    LIMIT_FAILURE_TITLE,
    PARSE_FAILURE_TITLE,
    ExtractionMetadata,
    ExtractionResult,
    GenerationResult,
    MatchingPair,
    QuestionDraft,
    QuestionSuggestion,
    QuestionType,
)


class TestQuestionDraft(unittest.TestCase):
    def test_to_dict_uses_wire_names(self) -> None:
        draft = QuestionDraft(
            id="ai-1-abc",
            text="Match the formulas.",
            marks=4,
            type="Matching",
            matching_pairs=[MatchingPair("H2O", "Water")],
            marking_scheme="1 mark each",
            extra={"subtopic": "Compounds"},
        )
        self.assertEqual(
            draft.to_dict(),
            {
                "subtopic": "Compounds",
                "id": "ai-1-abc",
                "text": "Match the formulas.",
                "marks": 4,
                "difficulty": None,
                "topic": None,
                "type": "Matching",
                "options": [],
                "matchingPairs": [{"left": "H2O", "right": "Water"}],
                "markingScheme": "1 mark each",
            },
        )

    def test_with_updates_returns_copy(self) -> None:
        draft = QuestionDraft(id="a")
        updated = draft.with_updates(difficulty="Easy")
        self.assertIsNone(draft.difficulty)
        self.assertEqual(updated.difficulty, "Easy")
        self.assertEqual(updated.id, "a")

    def test_question_type_values(self) -> None:
        self.assertEqual(len(QuestionType.values()), 10)
        self.assertIn("Fill-in-the-blank", QuestionType.values())


class TestGenerationResult(unittest.TestCase):
    def test_failure(self) -> None:
        result = GenerationResult.failure("Expecting value")
        self.assertTrue(result.failed)
        self.assertEqual(result.suggested_title, PARSE_FAILURE_TITLE)
        self.assertEqual(result.questions, ())
        self.assertEqual(result.error, "Expecting value")

        limited = GenerationResult.failure("too big", title=LIMIT_FAILURE_TITLE)
        self.assertTrue(limited.failed)

    def test_empty_success_is_not_failure(self) -> None:
        self.assertFalse(GenerationResult(suggested_title="T").failed)

    def test_to_dict(self) -> None:
        result = GenerationResult("T", (QuestionDraft(id="a", text="Q"),))
        data = result.to_dict()
        self.assertEqual(data["suggestedTitle"], "T")
        self.assertEqual(data["questions"][0]["text"], "Q")
        self.assertEqual(GenerationResult.failure("x").to_dict()["questions"], [])


class TestSuggestionAndExtractionRecords(unittest.TestCase):
    def test_suggestion_from_dict(self) -> None:
        suggestion = QuestionSuggestion.from_dict(
            {
                "refinedText": "What is 2 + 2?",
                "options": "4",
                "suggestedMarks": 1,
                "suggestedTopic": "Arithmetic",
                "graphSvg": "<svg/>",
            }
        )
        self.assertEqual(suggestion.refined_text, "What is 2 + 2?")
        self.assertEqual(suggestion.options, [])
        self.assertEqual(suggestion.suggested_marks, 1)
        self.assertEqual(suggestion.graph_svg, "<svg/>")
        self.assertIsNone(suggestion.blooms_level)

    def test_metadata_from_dict(self) -> None:
        metadata = ExtractionMetadata.from_dict(
            {"documentTitle": "Paper 1", "totalQuestionsFound": 12}
        )
        self.assertEqual(metadata.document_title, "Paper 1")
        self.assertIsNone(metadata.estimated_subject)
        self.assertEqual(metadata.total_questions_found, 12)
        self.assertEqual(ExtractionMetadata.from_dict(None), ExtractionMetadata())

    def test_extraction_failed(self) -> None:
        self.assertFalse(ExtractionResult().failed)
        self.assertTrue(ExtractionResult(error="bad").failed)


if __name__ == "__main__":
    unittest.main()
