from __future__ import annotations

import argparse
import asyncio
import json
from pathlib import Path

from app.core.config import get_settings
from app.modules.study_notes.generator import AgentTextGenerator
from app.modules.study_notes.main import StudyNotesGenerator


def _read_text(path: str) -> str:
    return Path(path).read_text(encoding="utf-8")


def _build_service() -> StudyNotesGenerator:
    cfg = get_settings().generation
    return StudyNotesGenerator(AgentTextGenerator(cfg), cfg)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="study-notes", description="Study notes generator CLI"
    )
    sub = parser.add_subparsers(dest="cmd", required=True)

    n = sub.add_parser("notes", help="Generate structured notes from a transcript")
    n.add_argument("--transcript-file", "-t", required=True, help="Transcript text file")

    q = sub.add_parser("questions", help="Generate exam questions from notes JSON")
    q.add_argument("--notes-file", "-n", required=True, help="JSON file with notes")
    q.add_argument("--exam-type", "-e", required=True, help="Exam type label")

    r = sub.add_parser(
        "relevance", help="Bucket transcript topics by relevance to a request"
    )
    r.add_argument("--transcript-file", "-t", required=True, help="Transcript text file")
    r.add_argument("--prompt", "-p", required=True, help="Topics the user cares about")

    args = parser.parse_args(argv)
    svc = _build_service()

    if args.cmd == "notes":
        result = asyncio.run(svc.generate_notes(_read_text(args.transcript_file)))
    elif args.cmd == "questions":
        notes = json.loads(_read_text(args.notes_file))
        result = asyncio.run(svc.generate_questions(notes, args.exam_type))
    elif args.cmd == "relevance":
        result = asyncio.run(
            svc.generate_relevance_notes(_read_text(args.transcript_file), args.prompt)
        )
    else:
        parser.print_help()
        return 2

    print(json.dumps(StudyNotesGenerator.to_jsonable(result), indent=2, ensure_ascii=False))
    # Empty output means generation failed (details are in the log).
    empty = result.is_empty() if hasattr(result, "is_empty") else not result
    return 1 if empty else 0


if __name__ == "__main__":
    raise SystemExit(main())
