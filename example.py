#!/usr/bin/env python3
"""
Example usage of debug-json.

This script shows a record going through its pretty debug rendering and
coming out as minified JSON, the same conversion applied to a dump that
only exists as text, and what happens with unsupported values.
"""

import json
from dataclasses import dataclass, field
from typing import List, Tuple

from debug_json import (
    JSONDebugTranscoder,
    PrettyDebugRenderer,
    serialize,
    serialize_text,
    serialize_with_pascal_case,
)


@dataclass
class Profile:
    age: int
    city: str
    interests: List[str] = field(default_factory=list)


@dataclass
class User:
    user_id: int
    name: str
    active: bool
    profile: Profile
    last_login: Tuple[int, int, int]


def main():
    """Main example function."""
    print("debug-json Example")
    print("=" * 50)

    user = User(
        user_id=1,
        name='Alice "Al" Johnson',
        active=True,
        profile=Profile(age=30, city="New York", interests=["reading", "hiking"]),
        last_login=(2024, 1, 15),
    )

    dump = PrettyDebugRenderer().render_to_string(user)
    print(f"Debug rendering:\n{dump}\n")

    json_string = serialize(user)
    print(f"JSON:        {json_string}")
    print(f"PascalCase:  {serialize_with_pascal_case(user)}")

    # The same conversion from text, e.g. a dump copied out of a log file
    from_text = serialize_text(dump)
    print(f"From text:   {from_text}")
    print(f"Identical:   {from_text == json_string}\n")

    # Quoted strings use the non-standard escape, so check before parsing
    transcoder = JSONDebugTranscoder()
    result = transcoder.transcode(user)
    if result.warnings:
        print("⚠️  Output is not strict JSON:")
        for warning in result.warnings:
            print(f"   • {warning}")
    else:
        print(f"Parsed back: {json.loads(result.json_string)}")

    # Strict mode reports values the transcoder cannot represent
    strict = JSONDebugTranscoder(strict=True)
    result = strict.transcode({"owner": user.name, "deleted_at": None})
    if not result.success:
        print("\n❌ Strict transcode failed:")
        for error in result.errors or []:
            print(f"   • {error}")
        print(f"   Partial output: {result.json_string!r}")


if __name__ == "__main__":
    main()
