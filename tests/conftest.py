"""
Pytest configuration and shared fixtures for lzon tests.

Provides immutable test data fixtures for the decoder and a canned script
list served through an httpx mock transport.
"""

from collections.abc import Callable
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

import httpx
import pytest


@dataclass(frozen=True)
class JsonTestCase:
    """
    Immutable container for JSON test case data.

    For failing cases ``expected_output`` holds the start of the expected
    error message.
    """

    description: str
    input_data: str
    should_fail: bool = False
    expected_output: Any = None
    skip_reason: str = ""


@pytest.fixture
def json_fail_cases() -> list[JsonTestCase]:
    """
    Provides the json.org JSON_checker documents with the error each raises.

    fail1 (scalar payload) and fail18 (deep nesting) are accepted.
    """
    fail_docs = [
        # https://json.org/JSON_checker/test/fail1.json
        ('"A JSON payload should be an object or array, not a string."', ""),
        # https://json.org/JSON_checker/test/fail2.json
        ('["Unclosed array"', "expected ']' or ','"),
        # https://json.org/JSON_checker/test/fail3.json
        ('{unquoted_key: "keys must be quoted"}', "expected string for key"),
        # https://json.org/JSON_checker/test/fail4.json
        ('["extra comma",]', "unexpected character ']'"),
        # https://json.org/JSON_checker/test/fail5.json
        ('["double extra comma",,]', "unexpected character ','"),
        # https://json.org/JSON_checker/test/fail6.json
        ('[   , "<-- missing value"]', "unexpected character ','"),
        # https://json.org/JSON_checker/test/fail7.json
        ('["Comma after the close"],', "trailing garbage"),
        # https://json.org/JSON_checker/test/fail8.json
        ('["Extra close"]]', "trailing garbage"),
        # https://json.org/JSON_checker/test/fail9.json
        ('{"Extra comma": true,}', "expected string for key"),
        # https://json.org/JSON_checker/test/fail10.json
        (
            '{"Extra value after close": true} "misplaced quoted value"',
            "trailing garbage",
        ),
        # https://json.org/JSON_checker/test/fail11.json
        ('{"Illegal expression": 1 + 2}', "expected '}' or ','"),
        # https://json.org/JSON_checker/test/fail12.json
        ('{"Illegal invocation": alert()}', "unexpected character 'a'"),
        # https://json.org/JSON_checker/test/fail13.json
        ('{"Numbers cannot have leading zeroes": 013}', "invalid number '013'"),
        # https://json.org/JSON_checker/test/fail14.json
        ('{"Numbers cannot be hex": 0x14}', "invalid number '0x14'"),
        # https://json.org/JSON_checker/test/fail15.json
        ('["Illegal backslash escape: \\x15"]', "invalid escape char 'x'"),
        # https://json.org/JSON_checker/test/fail16.json
        ("[\\naked]", "unexpected character '\\'"),
        # https://json.org/JSON_checker/test/fail17.json
        ('["Illegal backslash escape: \\017"]', "invalid escape char '0'"),
        # https://json.org/JSON_checker/test/fail18.json
        ('[[[[[[[[[[[[[[[[[[["Too deep"]]]]]]]]]]]]]]]]]]', ""),
        # https://json.org/JSON_checker/test/fail19.json
        ('{"Missing colon" null}', "expected ':' after key"),
        # https://json.org/JSON_checker/test/fail20.json
        ('{"Double colon":: null}', "unexpected character ':'"),
        # https://json.org/JSON_checker/test/fail21.json
        ('{"Comma instead of colon", null}', "expected ':' after key"),
        # https://json.org/JSON_checker/test/fail22.json
        ('["Colon instead of comma": false]', "expected ']' or ','"),
        # https://json.org/JSON_checker/test/fail23.json
        ('["Bad value", truth]', "invalid literal 'truth'"),
        # https://json.org/JSON_checker/test/fail24.json
        ("['single quote']", "unexpected character '''"),
        # https://json.org/JSON_checker/test/fail25.json
        ('["\ttab\tcharacter\tin\tstring\t"]', "control character in string"),
        # https://json.org/JSON_checker/test/fail26.json
        ('["tab\\   character\\   in\\  string\\  "]', "invalid escape char ' '"),
        # https://json.org/JSON_checker/test/fail27.json
        ('["line\nbreak"]', "control character in string"),
        # https://json.org/JSON_checker/test/fail28.json
        ('["line\\\nbreak"]', "invalid escape char '\n'"),
        # https://json.org/JSON_checker/test/fail29.json
        ("[0e]", "invalid number '0e'"),
        # https://json.org/JSON_checker/test/fail30.json
        ("[0e+]", "invalid number '0e+'"),
        # https://json.org/JSON_checker/test/fail31.json
        ("[0e+-1]", "invalid number '0e+-1'"),
        # https://json.org/JSON_checker/test/fail32.json
        ('{"Comma instead if closing brace": true,', "expected string for key"),
        # https://json.org/JSON_checker/test/fail33.json
        ('["mismatch"}', "expected ']' or ','"),
        # https://code.google.com/archive/p/simplejson/issues/3
        ('["A\u001fZ control characters in string"]', "control character in string"),
    ]

    # Documents this decoder accepts
    skips = {
        1: "top-level scalars are allowed",
        18: "nesting is only limited by max_depth",
    }

    return [
        JsonTestCase(
            description=f"fail{idx + 1}.json",
            input_data=doc,
            should_fail=True,
            expected_output=msg,
            skip_reason=skips.get(idx + 1, ""),
        )
        for idx, (doc, msg) in enumerate(fail_docs)
    ]


@pytest.fixture
def json_pass_cases() -> list[JsonTestCase]:
    """
    Provides JSON strings that must parse successfully.
    """
    return [
        JsonTestCase(
            description="pass1.json - complex nested structure",
            input_data="""[
    "JSON Test Pattern pass1",
    {"object with 1 member":["array with 1 element"]},
    {},
    [],
    -42,
    true,
    false,
    null,
    {
        "integer": 1234567890,
        "real": -9876.543210,
        "e": 0.123456789e-12,
        "E": 1.234567890E+34,
        "":  23456789012E66,
        "zero": 0,
        "one": 1,
        "space": " ",
        "quote": "\\"",
        "backslash": "\\\\",
        "controls": "\\b\\f\\n\\r\\t",
        "slash": "/ & \\/",
        "alpha": "abcdefghijklmnopqrstuvwyz",
        "ALPHA": "ABCDEFGHIJKLMNOPQRSTUVWYZ",
        "digit": "0123456789",
        "0123456789": "digit",
        "special": "`1~!@#$%^&*()_+-={':[,]}|;.</>?",
        "hex": "\\u0123\\u4567\\u89AB\\uCDEF\\uabcd\\uef4A",
        "true": true,
        "false": false,
        "null": null,
        "array":[  ],
        "object":{  },
        "address": "50 St. James Street",
        "url": "https://www.JSON.org/",
        "comment": "// /* <!-- --",
        "# -- --> */": " ",
        " s p a c e d " :[1,2 , 3

,

4 , 5        ,          6           ,7        ],"compact":[1,2,3,4,5,6,7],
        "jsontext": "{\\"object with 1 member\\":[\\"array with 1 element\\"]}"
    }
]""",
            should_fail=False,
        ),
        JsonTestCase(
            description="pass2.json - deep nesting",
            input_data='[[[[[[[[[[[[[[[[[[["Not too deep"]]]]]]]]]]]]]]]]]]]',
            should_fail=False,
        ),
        JsonTestCase(
            description="pass3.json - simple object",
            input_data='{"JSON Test Pattern pass3": {"The outermost value": "must be an object or array.", "In this test": "It is an object."}}',
            should_fail=False,
        ),
    ]


@pytest.fixture
def basic_json_values() -> list[JsonTestCase]:
    """
    Provides basic JSON value test cases for fundamental parsing.
    """
    return [
        JsonTestCase("null value", "null", False, None),
        JsonTestCase("true boolean", "true", False, True),
        JsonTestCase("false boolean", "false", False, False),
        JsonTestCase("integer", "42", False, 42),
        JsonTestCase("negative integer", "-17", False, -17),
        JsonTestCase("float", "3.14", False, 3.14),
        JsonTestCase("exponent", "1.5e3", False, 1500.0),
        JsonTestCase("empty string", '""', False, ""),
        JsonTestCase("simple string", '"hello"', False, "hello"),
        JsonTestCase("empty array", "[]", False, []),
        JsonTestCase("empty object", "{}", False, {}),
        JsonTestCase("simple array", "[1, 2, 3]", False, [1, 2, 3]),
        JsonTestCase(
            "simple object", '{"key": "value"}', False, {"key": "value"}
        ),
        JsonTestCase("truncated literal", "tru", True),
        JsonTestCase("trailing comma", "[1,2,]", True),
    ]


SCRIPT_LIST_URL = "https://lists.example.test/list.json"

SCRIPT_LIST = """[
    {"name": "Auto Queue", "description": "Queues for casual matches", "url": "https://scripts.example.test/autoqueue.lua"},
    {"name": "Chat Spy", "description": "Shows enemy team chat", "url": "https://scripts.example.test/chatspy.lua"},
    {"name": "Broken", "description": "No url on this one"},
    {"name": "Queue Timer", "description": "Displays time in QUEUE", "url": "https://scripts.example.test/missing.lua"}
]"""

SCRIPT_SOURCES = {
    "https://scripts.example.test/autoqueue.lua": 'print("auto queue")\n',
    "https://scripts.example.test/chatspy.lua": 'print("chat spy")\n',
}


def make_transport(
    routes: dict[str, str], requested: list[str] | None = None
) -> httpx.MockTransport:
    """Serves ``routes`` by URL; anything else is a 404."""

    def handler(request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        if requested is not None:
            requested.append(url)
        if url in routes:
            return httpx.Response(200, text=routes[url])
        return httpx.Response(404, text="not found")

    return httpx.MockTransport(handler)


@pytest.fixture
def requested_urls() -> list[str]:
    return []


@pytest.fixture
def script_client(requested_urls: list[str]) -> Iterator[httpx.Client]:
    """An httpx client answering for the canned script list and sources."""
    routes = {SCRIPT_LIST_URL: SCRIPT_LIST, **SCRIPT_SOURCES}
    with httpx.Client(transport=make_transport(routes, requested_urls)) as client:
        yield client


@pytest.fixture
def client_factory() -> Iterator[Callable[[dict[str, str]], httpx.Client]]:
    """Builds clients for ad-hoc routes; closed at teardown."""
    clients: list[httpx.Client] = []

    def factory(routes: dict[str, str]) -> httpx.Client:
        client = httpx.Client(transport=make_transport(routes))
        clients.append(client)
        return client

    yield factory
    for client in clients:
        client.close()
