"""Prompt templates for notes, exam questions and relevance analysis.

Every template states the output shape in prose, shows one literal JSON
example and asks for the JSON payload only. Builders are pure functions.
"""

from __future__ import annotations

import json
from typing import Any

NOTES_TEMPLATE = """
You are an expert academic assistant trained to convert educational content into structured, easy-to-understand notes **specifically for students preparing for exams or interviews**.

Your task is to convert the following video transcript into an array of JSON objects. Each object must include:

- **title**: Main subject area.
- **subtitle**: Specific subtopic or concept.
- **description**: Array of bullet points with detailed and clear explanations in simple language. Include:
  - Definitions with clarity.
  - Real-world analogies or examples where helpful.
  - Important terms in **bold** or *italic* (use Markdown).
  - Simple explanations of technical terms.
  - Step-by-step logic or breakdowns if applicable.

### Output Format:
```json
[
  {{
    "title": "Main Topic",
    "subtitle": "Subtopic",
    "description": [
      "- Clear and concise explanation of the subtopic.",
      "- Important concepts in **bold** or *italic*.",
      "- Real-world analogy: Like a traffic controller for processes.",
      "- Mention of how this concept is used in interviews/exams."
    ]
  }}
]
```

Only return the JSON array. Do **not** include any extra text or explanation.

Now process the following transcript accordingly:

"{transcript}"
"""

QUESTIONS_SYSTEM = """
You are an AI that generates exam-style questions from educational notes.

Your task is to create a **JSON array** of question objects. Each object must include:
- "question": the question (string)
- "answer": the corresponding answer (string)
- "type": "short" or "long" based on answer length

### Output Example:
```json
[
  {
    "question": "What is an operating system?",
    "answer": "An operating system is system software that manages computer hardware and software resources.",
    "type": "short"
  },
  {
    "question": "Explain the different types of operating systems.",
    "answer": "Types include batch, time-sharing, distributed, network, and real-time systems. Each is designed for specific use cases...",
    "type": "long"
  }
]
```

Instructions:
- Mix both **short** and **long** types.
- Keep answers exam-appropriate: clear, and detailed where the question needs it.
- DO NOT return anything except the JSON in the format above.
- Avoid introductory phrases like "Sure, here are your questions."
"""

QUESTIONS_USER_TEMPLATE = """
Generate exam-style questions based on these notes:

{notes}

Exam type: {exam_type}
"""

RELEVANCE_TEMPLATE = """
You are an expert content relevance analyzer.

Your task is to compare a user's request with a transcript and output a **JSON object** with three relevance categories: high, medium, and low.

### Instructions:

1. Extract the key topics/keywords from the user's request (they may be separated by commas or semicolons).
2. Scan the transcript and label each requested topic:
   - High Relevance: explained in the transcript with 2 or more explanatory points (give 2-4 detailed bullet points)
   - Medium Relevance: supported by exactly 1 explanatory point (give 1-2 brief bullet points)
   - Low Relevance: not mentioned or unrelated
3. Also include the major transcript topics the user did not ask for in Low Relevance, titled "Other: <topic>" (1-2 bullet points each).

### Format:
```json
{{
  "high_relevance": [
    {{
      "title": "Topic Name",
      "subtitle": "High Relevance",
      "description": [
        "- Explanation point 1.",
        "- Explanation point 2."
      ]
    }}
  ],
  "medium_relevance": [
    {{
      "title": "Topic Name",
      "subtitle": "Medium Relevance",
      "description": [
        "- Brief explanation."
      ]
    }}
  ],
  "low_relevance": [
    {{
      "title": "Other: Topic Name",
      "subtitle": "Low Relevance",
      "description": [
        "- Not related to the user's prompt."
      ]
    }}
  ]
}}
```

DO NOT include anything outside the JSON object above.

### Transcript:
```
{transcript}
```

### User Request:
```
{user_prompt}
```
"""


def _to_jsonable(notes: Any) -> Any:
    if not isinstance(notes, (list, tuple)):
        return notes
    return [n.model_dump() if hasattr(n, "model_dump") else n for n in notes]


def build_notes_prompt(transcript: str) -> str:
    return NOTES_TEMPLATE.format(transcript=transcript).strip()


def build_questions_prompt(notes: Any, exam_type: str) -> str:
    """Embed notes as pretty-printed JSON after the system instructions."""
    user = QUESTIONS_USER_TEMPLATE.format(
        notes=json.dumps(_to_jsonable(notes), indent=2, ensure_ascii=False),
        exam_type=exam_type,
    ).strip()
    return f"{QUESTIONS_SYSTEM.strip()}\n\n{user}"


def build_relevance_prompt(transcript: str, user_prompt: str) -> str:
    return RELEVANCE_TEMPLATE.format(
        transcript=transcript, user_prompt=user_prompt
    ).strip()
