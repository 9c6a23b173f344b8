"""
Test documents for jsontree benchmarks.

Each generator builds its document as a ``JsonValue`` tree and renders it
with ``jsontree.serialize``, so the benchmarks also exercise the value
model's constructors. A fixed seed keeps the documents identical between
runs.
"""

import random
import string
from collections.abc import Callable

import jsontree
from jsontree import JsonValue

_SEED = 20240115
_ESCAPE_PROBABILITY = 0.3
_ESCAPES = ["\"", "\\", "/", "\b", "\f", "\n", "\r", "\t"]
_NON_ASCII = "äöüßéèçñøåæ€日本語中文한국어😀🚀"


def _random_string(rng: random.Random, length: int) -> str:
    return "".join(rng.choices(string.ascii_letters, k=length))


def _small_object(rng: random.Random) -> JsonValue:
    """A small object (< 1KB) with basic key-value pairs."""
    return JsonValue.from_python(
        {
            "id": 12345,
            "name": "Alice Johnson",
            "email": "alice@example.com",
            "active": True,
            "balance": 1234.56,
            "metadata": {"created": "2024-01-15T10:30:00Z", "source": "api"},
        }
    )


def _large_object(rng: random.Random) -> JsonValue:
    """A large object (> 10KB): a profile plus transaction history."""
    doc = JsonValue.object()
    doc.set("user_id", JsonValue.number(rng.randint(1000000, 9999999)))

    profile = JsonValue.from_python(
        {
            "first_name": _random_string(rng, 10),
            "last_name": _random_string(rng, 12),
            "language": rng.choice(["en", "es", "fr", "de", "zh"]),
            "notifications": {
                "email": rng.choice([True, False]),
                "sms": rng.choice([True, False]),
            },
        }
    )
    doc.set("profile", profile)

    transactions = JsonValue.array()
    for i in range(50):
        transactions.push_back(
            JsonValue.from_python(
                {
                    "id": f"txn_{i:06d}",
                    "amount": round(rng.uniform(1.0, 1000.0), 2),
                    "currency": rng.choice(["USD", "EUR", "GBP", "JPY"]),
                    "description": f"Payment for {_random_string(rng, 20)}",
                    "status": rng.choice(["completed", "pending", "failed"]),
                }
            )
        )
    doc.set("transactions", transactions)

    activity = JsonValue.array()
    for _ in range(30):
        activity.push_back(
            JsonValue.from_python(
                {
                    "action": rng.choice(["login", "logout", "view"]),
                    "ip_address": ".".join(
                        str(rng.randint(1, 255)) for _ in range(4)
                    ),
                    "user_agent": f"Mozilla/5.0 ({_random_string(rng, 20)})",
                }
            )
        )
    doc.set("activity_log", activity)
    return doc


def _mixed_array(rng: random.Random) -> JsonValue:
    """A 200-element array of every value kind."""
    builders: list[Callable[[int], JsonValue]] = [
        lambda i: JsonValue.number(rng.randint(-1000, 1000)),
        lambda i: JsonValue.number(round(rng.uniform(-100.0, 100.0), 3)),
        lambda i: JsonValue.string(_random_string(rng, rng.randint(5, 30))),
        lambda i: JsonValue.boolean(rng.choice([True, False])),
        lambda i: JsonValue.null(),
        lambda i: JsonValue.from_python(
            {"index": i, "value": _random_string(rng, 10)}
        ),
    ]
    return JsonValue.array(rng.choice(builders)(i) for i in range(200))


def _nested_structure(rng: random.Random) -> JsonValue:
    """An object tree eight levels deep with fan-out three."""

    def build(depth: int) -> JsonValue:
        if depth <= 0:
            return JsonValue.object({"value": JsonValue.string("leaf")})

        node = JsonValue.object()
        node.set("level", JsonValue.number(depth))
        node.set("data", JsonValue.string(_random_string(rng, 15)))
        node.set("items", JsonValue.array(build(depth - 1) for _ in range(3)))
        return node

    return build(8)


def _string_heavy(rng: random.Random) -> JsonValue:
    """Strings where roughly a third of the characters need escaping."""

    def escaped_string() -> str:
        return "".join(
            rng.choice(_ESCAPES)
            if rng.random() < _ESCAPE_PROBABILITY
            else rng.choice(string.ascii_letters + string.digits + " ")
            for _ in range(50)
        )

    return JsonValue.from_python(
        {
            "strings": [escaped_string() for _ in range(100)],
            "paths": [
                f"C:\\Users\\{_random_string(rng, 8)}\\file_{i}.txt"
                for i in range(20)
            ],
        }
    )


def _unicode_heavy(rng: random.Random) -> JsonValue:
    """Multi-byte text throughout, including astral-plane characters."""
    return JsonValue.from_python(
        {
            f"clé_{i}": "".join(rng.choices(_NON_ASCII, k=40))
            for i in range(100)
        }
    )


_GENERATORS: dict[str, Callable[[random.Random], JsonValue]] = {
    "small_object": _small_object,
    "large_object": _large_object,
    "mixed_array": _mixed_array,
    "nested_structure": _nested_structure,
    "string_heavy": _string_heavy,
    "unicode_heavy": _unicode_heavy,
}

DATA_TYPES = tuple(_GENERATORS)


def generate_test_tree(data_type: str) -> JsonValue:
    """Builds the benchmark document for ``data_type``."""
    if data_type not in _GENERATORS:
        raise ValueError(f"Unknown data type: {data_type}")
    return _GENERATORS[data_type](random.Random(_SEED))


def generate_test_data(data_type: str) -> str:
    """Renders the benchmark document for ``data_type`` as JSON text."""
    return jsontree.serialize(generate_test_tree(data_type))
