"""
exambalm demonstration script.
"""

import json
import logging

import exambalm


def main():
    logging.basicConfig(level=logging.WARNING)

    print("exambalm - Exam Response Cleaning Demo")
    print("=" * 40)

    examples = [
        # Fenced output with a chatty preamble
        (
            "Sure! Here's the JSON:\n```json\n"
            '{"suggestedTitle": "Rivers", "questions": [{"text": "Name a delta."}]}\n'
            "```",
            "Fences and preamble",
        ),
        # LaTeX and chemistry backslashes
        (
            r'{"suggestedTitle": "Science", "questions": ['
            r'{"text": "Simplify \\frac{a}{b}"}, {"text": "Balance \ce{H2 + O2}"}]}',
            "Raw backslashes",
        ),
        # Literal line break inside a string
        (
            '{"suggestedTitle": "History", "questions": '
            '[{"text": "Part (a)\nPart (b)", "type": "Essay-Plus"}]}',
            "Literal newline and unknown type",
        ),
        # Legitimate empty generation
        ('{"suggestedTitle": "T", "questions": []}', "Empty question list"),
        # Refusal with no JSON at all
        ("I'm sorry, I can't help with that.", "No JSON object"),
    ]

    for i, (raw, description) in enumerate(examples, 1):
        print(f"\n{i}. {description}")
        print(f"Input:  {raw!r}")

        result = exambalm.parse_generation(raw)
        status = "FAILED" if result.failed else "ok"
        print(f"Status: {status}")
        print(f"Output: {json.dumps(result.to_dict(), indent=2)}")

    # Batches generated per difficulty and merged
    print(f"\n{len(examples) + 1}. Merged difficulty batches")
    batches = {
        level: exambalm.parse_generation(
            f'{{"suggestedTitle": "Algebra", '
            f'"questions": [{{"text": "{level} question"}}]}}'
        )
        for level in ("Easy", "Medium", "Hard")
    }
    merged = exambalm.merge_batches(batches)
    for question in merged.questions:
        print(f"  {question.difficulty:<10} {question.id}  {question.text}")


if __name__ == "__main__":
    main()
