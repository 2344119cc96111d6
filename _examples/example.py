"""Example usage of safe_copy with JSON input file.

This script reads copy parameters from a JSON file, copies the source
tree with SafeCopyEngine and prints the resulting statistics. A symlink
that escapes the root aborts the copy with PermissionViolation.

JSON format:
    {
        "source": "./site",
        "destination": "/tmp/site-copy",
        "root": ".",
        "ignore": ["*/.git", "*.pyc"],
        "normalize_mode": "conservative"
    }

Usage:
    cd ..
    python _examples/example.py [path_to_input.json]

Example:
    python example.py                 # Uses default example_in.json
    python example.py myinput.json    # Uses custom JSON file
"""

import logging
import sys
import json
from pathlib import Path
from typing import List, Optional

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from path_config import PathConfig
from path_errors import PathutilError, PermissionViolation
from path_value import PathValue

class Colors:
    YELLOW = "\033[33m"
    CYAN = "\033[36m"
    BRIGHT_YELLOW = "\033[93m"
    BRIGHT_CYAN = "\033[96m"
    DIM = "\033[2m"
    RESET = "\033[0m"

logging.basicConfig(
    level=logging.INFO,
    format= Colors.DIM + '%(asctime)s [%(levelname)s] ◦ %(name)s ◦ %(message)s' + Colors.RESET,
    handlers=[
        logging.StreamHandler()
    ]
)


class CopyParams:
    """Data class for copy parameters."""
    def __init__(
        self,
        source: str,
        destination: str,
        root: str,
        ignore: Optional[List[str]] = None,
        normalize_mode: str = "conservative"
    ):
        self.source = source
        self.destination = destination
        self.root = root
        self.ignore = ignore or []
        self.normalize_mode = normalize_mode


def parse_input_file(filepath: str) -> CopyParams:
    """Parse JSON input file and extract copy parameters.

    Args:
        filepath: Path to the JSON input file

    Returns:
        CopyParams object with all copy parameters
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError("JSON input must be an object")

    # Required fields
    for key in ("source", "destination", "root"):
        if not data.get(key):
            raise ValueError(f"{key} is required")

    return CopyParams(
        source=data["source"],
        destination=data["destination"],
        root=data["root"],
        ignore=data.get("ignore", []),
        normalize_mode=data.get("normalize_mode", "conservative")
    )


def print_call(name: str, params: dict) -> None:
    """Print an operation call in the tool-call format."""
    params_str = json.dumps(params, ensure_ascii=False)
    print(f"🛠️  {Colors.YELLOW}call → → → ◦ [{name}] ◦ {Colors.BRIGHT_YELLOW}{params_str}{Colors.RESET}")


def print_result(name: str, result: dict) -> None:
    """Print an operation result in the tool-response format."""
    print(f"📄 {Colors.CYAN}call ← ← ← ◦ [{name}] ◦")
    print(f"{Colors.BRIGHT_CYAN}{json.dumps(result, indent=2, ensure_ascii=False)}{Colors.RESET}")


def main():
    if len(sys.argv) > 1:
        input_file = sys.argv[1]
    else:
        input_file = "example_in.json"

    input_path = Path(input_file)

    if not input_path.exists():
        print(f"❌ Input file not found: {input_file}")
        print()
        print("Create a JSON file with the following format:")
        print("-" * 40)
        print(json.dumps({
            "source": "./site",
            "destination": "/tmp/site-copy",
            "root": ".",
            "ignore": ["*/.git", "*.pyc"],
            "normalize_mode": "conservative"
        }, indent=4))
        print("-" * 40)
        sys.exit(1)

    print("=" * 60)
    print("Safe Copy")
    print("=" * 60)
    print()

    try:
        params = parse_input_file(str(input_path))
        config = PathConfig(normalize_mode=params.normalize_mode)
    except (ValueError, json.JSONDecodeError) as e:
        print(f"❌ Error parsing input file: {e}")
        sys.exit(1)

    source = PathValue(params.source, config=config)

    print(f"📁 Source: {source} → {source.normalize()}")
    print(f"🎯 Destination: {params.destination}")
    print(f"🔒 Root: {params.root}")
    print(f"🙈 Ignore: {', '.join(params.ignore) or '(none)'}")
    print()

    call_params = {
        'source': str(source),
        'destination': params.destination,
        'root': params.root,
        'ignore': params.ignore
    }

    print_call('safe_copy', call_params)

    try:
        stats = source.safe_copy(params.destination, params.root, ignore=params.ignore)
    except PermissionViolation as e:
        print(f"❌ Copy refused: {e}")
        sys.exit(2)
    except PathutilError as e:
        print(f"❌ Copy failed: {e}")
        sys.exit(1)

    print_result('safe_copy', stats.to_dict())


if __name__ == "__main__":
    main()
