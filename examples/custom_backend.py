"""Example of running examgen with a custom generation backend.

This example demonstrates how to implement the GenerativeBackendProtocol
so the analysis and generation stages can run without the Gemini API,
for instance against canned responses in a demo or a classroom offline.
"""

import asyncio
import json

from examgen import GenerationConfig, analyze, generate
from examgen.documents import export_exam_to_docx
from examgen.generators import DEFAULT_MATRIX, check_exam

CANNED_ANALYSIS = {
    "difficulty": "Medium",
    "structureSummary": "5 parts: phonetics, grammar, reading, cloze test, writing",
    "cefrLevel": "B1",
    "readingStats": {"avgWordCount": 220, "difficultyDesc": "Everyday topics, short sentences"},
}

CANNED_EXAM = {
    "title": "Grade 10 Entrance Examination",
    "subtitle": "Subject: English",
    "duration": 60,
    "sections": [
        {
            "title": "Part 1. Choose the letter (A, B, C or D) to indicate the correct answer.",
            "totalPoints": 0.25,
            "questions": [
                {
                    "id": "q1",
                    "partName": "Lexico-Grammar",
                    "type": "multiple-choice",
                    "content": "My sister _____ to school every day.",
                    "options": ["A. go", "B. goes", "C. going", "D. went"],
                    "correctAnswer": "B",
                    "level": "Recognition",
                }
            ],
        }
    ],
}


class CannedBackend:
    """A backend that answers from fixed payloads.

    The first request of a stage goes to the caller's preferred model;
    returning text here ends the stage without any fallback.
    """

    async def generate_content(
        self,
        model: str,
        prompt: str,
        *,
        system_instruction: str | None = None,
        response_mime_type: str = "application/json",
    ) -> str | None:
        print(f"  -> {model} ({len(prompt)} prompt characters)")
        payload = CANNED_EXAM if system_instruction else CANNED_ANALYSIS
        # Models often wrap JSON in a Markdown fence; the pipeline strips it
        return f"```json\n{json.dumps(payload)}\n```"


async def main():
    config = GenerationConfig(credential="offline-demo")
    backend = CannedBackend()

    print("Analyzing sample exam...")
    analysis = await analyze("Part 1. Choose the correct answer. ...", config, backend=backend)
    print(f"  CEFR level: {analysis.cefr_level}, reading ~{analysis.reading_stats.avg_word_count} words")

    print("\nGenerating exam...")
    exam = await generate(DEFAULT_MATRIX, analysis, config, backend=backend)
    for violation in check_exam(exam):
        print(f"  warning: {violation.message}")

    path = export_exam_to_docx(exam, "demo_exam.docx")
    print(f"\nExported {exam.item_count} items to {path}")


if __name__ == "__main__":
    asyncio.run(main())
