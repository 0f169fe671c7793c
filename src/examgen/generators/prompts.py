"""Prompts for exam analysis and generation.

This module contains the prompt templates sent to the generation
backend. Templates use ``str.format`` placeholders, so literal braces in
the JSON examples are doubled.
"""

from __future__ import annotations

# Tolerance applied to target passage lengths
WORD_COUNT_TOLERANCE = 0.10

# Matrix used when the user does not supply one
DEFAULT_MATRIX = """I. MULTIPLE CHOICE (8.0 points)
1. Phonetics (4 questions): Pronunciation (2), Stress (2).
2. Lexico-Grammar (6 questions): Tenses, Prepositions, Phrasal verbs, Word choice.
3. Functional Speaking (2 questions): Daily conversation exchanges.
4. Reading Comprehension (5 questions): Read a passage about Environment and answer.
5. Cloze Test (5 questions): Fill in the blanks (Topic: Technology).

II. WRITING (2.0 points)
1. Sentence Transformation (4 questions): Voice, Conditional, Reported speech.
2. Paragraph Writing (1 question): Write a paragraph (100-120 words) about a local festival."""

# Prompt for analyzing a sample exam
ANALYSIS_PROMPT = """You are an expert in English language education in Vietnam.
Analyze the content of the exam below (extracted from a document).

Tasks:
1. Determine the overall difficulty (Easy/Medium/Fairly hard/Hard).
2. Summarize the structure (main parts, number of questions).
3. Estimate the CEFR level of the exam (for example A2, B1).
4. Analyze the READING and CLOZE TEST parts separately:
   - READING COMPREHENSION: compute the average word count of the reading passages.
   - CLOZE TEST: compute the average word count of the gap-fill passages.
   - Briefly describe the complexity of the language used.

Return JSON in this format:
{{
  "difficulty": "string",
  "structureSummary": "string",
  "cefrLevel": "string",
  "clozeStats": {{
    "avgWordCount": number,
    "difficultyDesc": "string"
  }},
  "readingStats": {{
    "avgWordCount": number,
    "difficultyDesc": "string"
  }}
}}

Exam content:
{exam_text}"""

# System instruction for exam generation
EXAM_SYSTEM_INSTRUCTION = """You are an expert writer of English entrance exams for grade 10 upper-secondary schools in Vietnam.
You know the 2018 general education curriculum well (Global Success, Friends Plus textbooks...).

Important requirements:
- Content: 85% grade 9 knowledge, 10% grade 8, 5% advanced.
- Do not reuse or duplicate questions.
- Language: standard, formal English."""

# Prompt for generating a complete exam
EXAM_GENERATION_PROMPT = """Create a complete exam based on the MATRIX and CONSTRAINTS below.

1. TARGET DIFFICULTY: {difficulty} (equivalent to {cefr_level}).

2. READING AND CLOZE TEST CONSTRAINTS (MANDATORY):
   - READING COMPREHENSION passages: about {reading_words} words each ({reading_min}-{reading_max} words).
   - CLOZE TEST passages: about {cloze_words} words each ({cloze_min}-{cloze_max} words).
   - LANGUAGE: use texts of a difficulty matching this description: "{reading_desc}".
   - TOPICS: within the new grade 9 English textbooks (Global Success, Friends Plus...).
   - If the matrix asks for several passages, respect the length of each kind.

3. JSON STRUCTURE FOR READING / CLOZE TEST SECTIONS:
   - The PASSAGE must be placed in the "passageContent" field of the Section object. Never put the passage inside a question.
   - The QUESTIONS go in the "questions" array as usual.
   - For a cloze test: the passage with numbered gaps (1), (2)... goes in "passageContent"; the matching multiple-choice questions go in "questions".

4. SPECIAL FORMAT FOR GAP-FILL CONVERSATIONS:
   - If the matrix contains an exercise such as "Read the conversation and choose the correct letter...", create ONE single question object for the whole exercise.
   - type: "conversation-matching"
   - content: the whole conversation, with the gaps marked (1), (2), (3)...
   - options: the list of answers (A, B, C, D, E, F, G...).
   - questionCount: REQUIRED, the number of gaps to fill (for example 5).
   - correctAnswer: the answers in order, for example "1-A, 2-C, 3-D...".

5. SPECIAL FORMAT FOR SHORT TEXT READING ("Read the texts"):
   - This exercise has several short texts (messages, signs, notes, notices...).
   - EACH short text corresponds to ONE separate question.
   - Structure of each question:
     {{
       "id": "short_text_1",
       "partName": "Read the texts",
       "type": "multiple-choice",
       "content": "[MESSAGE/SIGN]:\\nBarbara, I had a great time\\nskateboarding with you again yesterday!\\nI can't find my cap anywhere.\\nDid I leave it at your place?\\nKen\\n\\n[QUESTION]: What would Ken like Barbara to do?",
       "options": ["A. look for something that he has lost", "B. bring his skateboard to school", "C. go skateboarding with him soon", "D. decide where they will meet next"],
       "correctAnswer": "A",
       "level": "Comprehension"
     }}
   - The "content" field MUST contain BOTH the short text AND the question, separated by "[QUESTION]:".
   - Text kinds: phone messages, public signs, notes, short emails, notices.
   - Difficulty: texts of 30-50 words, questions testing the main idea or a specific detail.

6. EXAM MATRIX:
{matrix}

7. SECTION TITLES:
   - The "title" field of each section MUST contain the part name and the full instructions.
   - Required format: "Part [number]. [Detailed instructions]".
   - Correct example: "Part 1. Choose the letter (A, B, C or D) to indicate the correct answer to each of the following questions."

8. QUESTION TYPES:
   - "type" must be one of: {question_types}.

9. OUTPUT (JSON):
Return JSON with the following structure (NO markdown block):
{{
  "title": "GRADE 10 UPPER-SECONDARY ENTRANCE EXAMINATION",
  "subtitle": "SUBJECT: ENGLISH - SCHOOL YEAR 2024-2025",
  "duration": 60,
  "sections": [
    {{
      "title": "Part 1. Choose the letter...",
      "totalPoints": 0.0,
      "questions": [
        {{
          "id": "unique_id",
          "partName": "Part name",
          "type": "multiple-choice",
          "content": "FULL QUESTION TEXT - REQUIRED. Example: My sister _____ to school every day.",
          "options": ["A. go", "B. goes", "C. going", "D. went"],
          "correctAnswer": "B",
          "level": "Recognition"
        }}
      ]
    }},
    {{
      "title": "Part 5. Read the following passage...",
      "passageContent": "Reading passage, with gaps (1), (2)... for a cloze test",
      "totalPoints": 0.0,
      "questions": [
        {{
          "id": "cloze_1",
          "partName": "Cloze Test",
          "type": "multiple-choice",
          "content": "Question for gap (1) in the passage",
          "options": ["A. option1", "B. option2", "C. option3", "D. option4"],
          "correctAnswer": "A",
          "level": "Comprehension"
        }}
      ]
    }}
  ]
}}

10. IMPORTANT NOTES ABOUT QUESTIONS:
   - EVERY question in a "questions" array MUST have a "content" field with the full question text.
   - "content" must never be empty. For gap-fill items, content is a sentence containing _____.
   - Grammar example: "She asked if we _____ our homework yet."
   - Vocabulary example: "The word 'preserve' in the passage is CLOSEST in meaning to _____."
"""


def word_count_bounds(avg_word_count: int, tolerance: float = WORD_COUNT_TOLERANCE) -> tuple[int, int]:
    """Get the accepted passage length range around a target word count.

    Args:
        avg_word_count: Target number of words.
        tolerance: Relative tolerance. Defaults to 10%.

    Returns:
        (minimum, maximum) word counts, rounded to integers.

    Example:
        >>> word_count_bounds(250)
        (225, 275)
    """
    return round(avg_word_count * (1 - tolerance)), round(avg_word_count * (1 + tolerance))
