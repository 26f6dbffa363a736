"""
Test data generators for decoding benchmarks.

Creates JSON documents shaped like the inputs lzon sees:
- Script lists of different sizes
- Mixed arrays and nested structures
- String-heavy content with escapes and surrogate pairs
"""

import json
import random
import string
from typing import Any

# Constants for random data generation
_INT_TYPE = 1
_FLOAT_TYPE = 2
_STRING_TYPE = 3
_BOOL_TYPE = 4
_NULL_TYPE = 5
_ESCAPE_PROBABILITY = 0.3

_EMOJI = ["\U0001f600", "\U0001f680", "\U0001f40d", "\u00e9", "\u4e2d"]


def generate_test_data(data_type: str) -> str:
    """Generates JSON test data based on specified type."""
    generators = {
        "script_list": _generate_script_list,
        "large_script_list": _generate_large_script_list,
        "mixed_array": _generate_mixed_array,
        "nested_structure": _generate_nested_structure,
        "string_heavy": _generate_string_heavy,
    }

    if data_type not in generators:
        raise ValueError(f"Unknown data type: {data_type}")

    return generators[data_type]()


def _script_entry(i: int) -> dict[str, Any]:
    name = f"{_random_string(8)} {_random_string(6)}"
    return {
        "name": name,
        "description": f"{_random_string(20)} {random.choice(_EMOJI)}",
        "url": f"https://raw.example.test/scripts/{name.replace(' ', '_')}_{i}.lua",
    }


def _generate_script_list() -> str:
    """Generates a script list of a typical size (< 4KB)."""
    return json.dumps([_script_entry(i) for i in range(25)], indent=4)


def _generate_large_script_list() -> str:
    """Generates a script list with extra metadata (> 100KB)."""
    entries = []
    for i in range(500):
        entry = _script_entry(i)
        entry["tags"] = random.sample(
            ["visuals", "aim", "movement", "misc", "chat", "queue"], k=3
        )
        entry["stars"] = random.randint(0, 5000)
        entry["rating"] = round(random.uniform(0, 5), 2)
        entry["deprecated"] = random.choice([True, False, None])
        entries.append(entry)
    return json.dumps(entries)


def _generate_mixed_array() -> str:
    """Generates a large array with mixed data types."""
    array: list[Any] = []

    for i in range(200):
        choice = random.randint(1, 6)
        if choice == _INT_TYPE:
            array.append(random.randint(-1000, 1000))
        elif choice == _FLOAT_TYPE:
            array.append(round(random.uniform(-100.0, 100.0), 3))
        elif choice == _STRING_TYPE:
            array.append(_random_string(random.randint(5, 30)))
        elif choice == _BOOL_TYPE:
            array.append(random.choice([True, False]))
        elif choice == _NULL_TYPE:
            array.append(None)
        else:
            array.append(
                {
                    "index": i,
                    "value": _random_string(10),
                    "score": round(random.uniform(0, 100), 2),
                }
            )

    return json.dumps(array)


def _generate_nested_structure() -> str:
    """Generates a nested JSON structure."""

    def create_nested_dict(depth: int) -> dict[str, Any]:
        if depth <= 0:
            return {"value": _random_string(10)}

        return {
            "level": depth,
            "data": _random_string(15),
            "items": [create_nested_dict(depth - 1) for _ in range(3)],
            "nested": create_nested_dict(depth - 1),
        }

    # 16 levels of objects and arrays
    return json.dumps(create_nested_dict(8))


def _generate_string_heavy() -> str:
    """Generates JSON with many string escape sequences."""

    def create_escaped_string() -> str:
        chars = []
        for _ in range(50):
            if random.random() < _ESCAPE_PROBABILITY:
                chars.append(
                    random.choice(['"', "\\", "/", "\b", "\f", "\n", "\r", "\t"])
                )
            else:
                chars.append(
                    random.choice(string.ascii_letters + string.digits + " ")
                )
        return "".join(chars)

    data = {
        "strings": [create_escaped_string() for _ in range(100)],
        # ensure_ascii writes these as \\uXXXX escapes and surrogate pairs
        "unicode": [
            f"Unicode: {random.choice(_EMOJI)} {chr(random.randint(0x0100, 0x07FF))}"
            for _ in range(50)
        ],
        "paths": {
            f"key_{i}": f"C:\\Users\\{_random_string(8)}\\scripts\\file_{i}.lua"
            for i in range(20)
        },
    }
    return json.dumps(data)


def _random_string(length: int) -> str:
    """Generates a random string of specified length."""
    return "".join(random.choices(string.ascii_letters, k=length))
