"""
Demonstration of the Term Machine

This script walks through the three layers of the package:
1. The Term Table for a small universe
2. A machine flipping variables and cascading over suffix terms
3. The flip orbits of every machine over two variables
"""

import logging

from term_machine import FlipGraph, Machine, terms_for


def print_section(title):
    """Print a formatted section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


def demonstrate_terms():
    print_section("TERM TABLE: 3 variables")

    for slot, term in enumerate(terms_for(3)):
        print(f"  {slot:>2}: {list(term)}")


def demonstrate_flip():
    print_section("FLIP: cascade over suffix terms")

    machine = Machine.from_mapping(3, {
        (0,): False, (1,): True, (2,): True,
        (0, 1): True, (0, 2): True, (1, 0): True,
        (1, 2): True, (2, 0): True, (2, 1): False,
        (0, 1, 2): False, (0, 2, 1): True, (1, 0, 2): False,
        (1, 2, 0): False, (2, 0, 1): False, (2, 1, 0): False,
    })
    print(f"\nBefore: {machine}")
    machine.flip(0)
    print(f"After flip(0): {machine}")
    print(f"Singletons: {machine.summary()['singletons']}")


def demonstrate_orbits():
    print_section("ORBITS: every machine over 2 variables")

    graph = FlipGraph(2)
    summary = graph.summary()
    print(f"\n  Machines: {summary['num_machines']}")
    print(f"  Orbits:   {summary['num_orbits']}")
    print(f"  Sizes:    {summary['min_orbit_size']}..{summary['max_orbit_size']}")

    smallest = graph.smallest_orbit()
    print(f"\nSmallest orbit ({len(smallest)} machines):")
    for position in smallest:
        print(f"  {position:>2}: {graph.machines[position]}")


def main():
    logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    demonstrate_terms()
    demonstrate_flip()
    demonstrate_orbits()
    print("\n" + "=" * 70 + "\n")


if __name__ == "__main__":
    main()
