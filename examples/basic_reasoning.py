#!/usr/bin/env python3
"""
Basic Reasoning Example

Demonstrates how to use NAL-Engine to store judgments, ask questions,
derive new judgments, and drive a session from a script.
"""

import sys

from nal_engine import (
    ExperienceBase,
    InferenceEngine,
    NALError,
    Session,
    extension,
    intension,
    Term,
)


SCRIPT = """
# A small taxonomy
/a robin is bird
/a bird is animal <0.9, 0.9>
/a penguin is bird
/a penguin similar ostrich <0.8, 0.9>

/apply deduction 1 2
/infer abduction 1 3
/q robin is animal
/q ? similar ostrich
/l
"""


def main():
    # Create a small experience base about animals
    base = ExperienceBase.from_statements([
        "robin is bird",
        ("bird is animal", "<0.9, 0.9>"),
        "penguin is bird",
        "chicken is bird",
        "human is animal",
        "saul is human",
    ], name="Animals")

    print(base.summary())
    print()

    # Meaning of terms
    print("=" * 60)
    print("Extension and Intension")
    print("=" * 60)
    print(f"  extension(animal): {sorted(t.word for t in extension(Term('animal'), base))}")
    print(f"  intension(penguin): {sorted(t.word for t in intension(Term('penguin'), base))}")

    # Questions
    print("\n" + "=" * 60)
    print("Queries")
    print("=" * 60)
    for question in ["robin is ?", "saul is animal", "robin is human", "fish is ?"]:
        print(f"\nQ: {question}")
        print(f"A: {base.query(question)}")

    # Inference
    print("\n" + "=" * 60)
    print("Inference")
    print("=" * 60)
    engine = InferenceEngine(base)
    for instruction in ["ded 1 2", "ind 1 3", "cnv 2", "ana 1 3"]:
        print(f"\n> {instruction}")
        try:
            print(engine.apply(instruction))
        except NALError as e:
            print(e.message)

    print("\n" + "=" * 60)
    print("Base Statistics")
    print("=" * 60)
    print(f"  Experiences: {base.num_experiences}")
    print(f"  Additions: {base.stats['additions']}")
    print(f"  Queries: {base.stats['queries']}")

    # Script mode
    print("\n" + "=" * 60)
    print("Session Script")
    print("=" * 60)
    session = Session()
    for output in session.execute_script(SCRIPT.splitlines()):
        if output.text:
            print(output.text)

    return 0


if __name__ == "__main__":
    sys.exit(main())
