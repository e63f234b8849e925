#!/usr/bin/env python3
"""
Safety / Memory Probe

Runs the emergency gate, the memory extractor and the suggestion lookup over
a handful of sample utterances and prints what each one decides. No network.

Usage:
  python backend/scripts/memory_probe.py
  python backend/scripts/memory_probe.py "I'm allergic to peanuts" "my chest pain is back"
"""
from __future__ import annotations

import os
import sys
import time

# Ensure backend package is importable when running from repo root
HERE = os.path.dirname(os.path.abspath(__file__))
BACKEND_DIR = os.path.abspath(os.path.join(HERE, ".."))
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)

from healthchat.domain.chat.suggestions import generate_suggestions  # noqa: E402
from healthchat.domain.memory.extractor import extract_memory  # noqa: E402
from healthchat.domain.safety.service import matched_keyword  # noqa: E402

SAMPLES = [
    "I am allergic to penicillin",
    "I was diagnosed with type 2 diabetes last year.",
    "I take metformin 500 mg per day",
    "My blood type is AB+",
    "I have chronic back pain and it hurts at night",
    "I've had a fever since Tuesday",
    "My dad has chest pain and can't breathe",
    "What should I eat for a balanced diet?",
]

print("=== SAFETY / MEMORY PROBE ===")

samples = sys.argv[1:] or SAMPLES
existing: list[str] = []

for text in samples:
    t0 = time.perf_counter()
    kw = matched_keyword(text)
    found = extract_memory([{"role": "user", "content": text}], existing)
    ms = (time.perf_counter() - t0) * 1000

    print(f"\n> {text}")
    print(f"  emergency : {kw or '-'}")
    if found:
        print(f"  memory    : [{found.category} @ {found.confidence:.2f}] {found.memory}")
        existing.append(found.memory)
    else:
        print("  memory    : -")
    print(f"  suggest   : {generate_suggestions(text)}")
    print(f"  took      : {ms:.2f} ms")

print(f"\n{len(existing)} memories would be stored")
