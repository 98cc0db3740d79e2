"""Cost calculation and greeting with default arguments."""

from __future__ import annotations


def calc_cost(base_cost: float = 100.0, tax_rate: float = 0.06, shipping_charge: float = 3.50) -> float:
    """Return the base cost plus tax plus shipping."""
    return base_cost + base_cost * tax_rate + shipping_charge


def greeting(name: str, prefix: str, suffix: str = " ") -> str:
    """Build the greeting line for a person."""
    return "Hello " + prefix + " " + name + " " + suffix


def main(argv: list[str] | None = None) -> int:
    for cost in (calc_cost(100.0, 0.08, 4.25), calc_cost(100.0, 0.08), calc_cost()):
        print(f"{cost:g} this is the value of the cost")
    print(greeting("Glenn", "MR.", "Juinor"))
    print(greeting("Frank", "Professor"))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())