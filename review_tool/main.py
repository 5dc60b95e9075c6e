"""
Command-line entry point for checking review tool input.

Usage:
    review-tool --request-file request.json
    review-tool --schema
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from review_tool.config import configure_logging, get_config
from review_tool.models import CodeReviewRequest, ReviewTarget, ValidationError, tool_input_schema, validate_request

logger = logging.getLogger(__name__)


def load_request_from_file(filepath: str) -> CodeReviewRequest:
    """Load and validate a review request from a JSON file."""
    with open(filepath, 'r') as f:
        data = json.load(f)
    return validate_request(data)


def print_summary(request: CodeReviewRequest, api_key_available: bool, debug: bool = False):
    """Print human-readable summary to console."""
    print("\n" + "="*60)
    print("CODE REVIEW REQUEST")
    print("="*60)

    target = request.target.value
    if request.diff_base:
        target += f" (against {request.diff_base})"
    print(f"\nTarget: {target}")
    print(f"Task: {request.task_description}")
    print(f"Model: {request.llm_provider.value}/{request.model_name}")
    print(f"API Key: {'found' if api_key_available else 'MISSING'}")
    print(f"Max Tokens: {request.effective_max_tokens}")
    if request.review_focus:
        print(f"Focus: {request.review_focus}")
    if debug and request.project_context:
        print(f"Project Context: {request.project_context}")

    print("\n" + "="*60)


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Validate code review tool input against the current environment"
    )
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument(
        "--request-file",
        help="Path to review request JSON file"
    )
    group.add_argument(
        "--schema",
        action="store_true",
        help="Print the review request JSON schema and exit"
    )

    args = parser.parse_args(argv)

    if args.schema:
        print(json.dumps(tool_input_schema(), indent=2))
        return 0

    try:
        config = get_config()
    except ValidationError as e:
        for error in e.errors:
            print(f"Error: {error.field}: {error.reason}", file=sys.stderr)
        return 1
    configure_logging(config)

    try:
        request = load_request_from_file(args.request_file)
    except FileNotFoundError:
        print(f"Error: request file not found: {args.request_file}", file=sys.stderr)
        return 1
    except json.JSONDecodeError as e:
        print(f"Error: request file is not valid JSON: {e}", file=sys.stderr)
        return 1
    except ValidationError as e:
        print("Error: invalid review request", file=sys.stderr)
        for error in e.errors:
            print(f"  {error.field}: {error.reason}", file=sys.stderr)
        return 1

    if request.target is ReviewTarget.BRANCH_DIFF and not request.diff_base:
        logger.warning("branch_diff target without diffBase - the review has nothing to compare against")

    api_key = config.get_api_key(request.llm_provider)
    if not api_key:
        logger.warning(f"No API key configured for provider: {request.llm_provider.value}")

    print_summary(request, api_key_available=bool(api_key), debug=config.is_debug_mode())
    return 0


if __name__ == "__main__":
    sys.exit(main())
