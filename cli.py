import argparse
import logging
import mimetypes
import sys
from pathlib import Path

from crackit.core.logging_setup import setup_console_logging
from crackit.services.conversion_service import FileConversionError, convert_file_to_text
from crackit.services.generation_service import QuizGenerationError, generate_test
from crackit.utils.json_utils import write_json_file

setup_console_logging()
log = logging.getLogger("crackit.cli")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate a quiz from study material")
    parser.add_argument("file", type=Path, help="Path to .pdf, .pptx, .docx or .txt file")
    parser.add_argument(
        "--output",
        type=Path,
        default=Path("quiz.json"),
        help="Where to write the generated questions",
    )
    return parser.parse_args(argv)


def read_study_text(path: Path) -> str:
    """Plain text files are read as-is, documents go through conversion."""
    if path.suffix.lower() == ".txt":
        return path.read_text(encoding="utf-8")
    content_type, _ = mimetypes.guess_type(path.name)
    return convert_file_to_text(path.name, content_type, path.read_bytes())


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        text = read_study_text(args.file)
        if not text.strip():
            log.error("No text found in %s", args.file)
            return 1
        questions = generate_test(text)
    except (FileConversionError, QuizGenerationError) as exc:
        log.error("%s", exc)
        return 1

    write_json_file(args.output, {"questions": [q.to_payload() for q in questions]})
    print(f"Saved {len(questions)} questions to {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
