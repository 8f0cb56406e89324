import sys
import os
import json
import argparse

# Add the project root to the python path so we can import 'milan'
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from milan.domain.matching.errors import MatchingError
from milan.logging_config import configure_logging
from milan.services.matching_service import MatchingService


def load_profile(path: str) -> dict:
    """
    Reads one birth profile from a JSON file.
    """
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Score Ashta Koot compatibility for two birth profiles."
    )
    parser.add_argument("--bride", required=True, help="Path to the bride's profile JSON")
    parser.add_argument("--groom", required=True, help="Path to the groom's profile JSON")
    parser.add_argument("--indent", type=int, default=None, help="Indent the JSON report")
    args = parser.parse_args(argv)

    configure_logging()

    try:
        report = MatchingService().compute_compatibility(
            load_profile(args.bride),
            load_profile(args.groom),
        )
    except (OSError, json.JSONDecodeError, MatchingError) as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    print(report.model_dump_json(indent=args.indent))
    return 0


if __name__ == "__main__":
    sys.exit(main())
