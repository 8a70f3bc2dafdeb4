"""Generate large sample CSV files with dotted headers."""
from __future__ import annotations

import random
from pathlib import Path
from typing import List, Optional

HEADER = (
    "name.firstName,name.lastName,age,address.line1,address.line2,"
    "address.city,address.state,gender,phone"
)

FIRST_NAMES = (
    "Aarav", "Vivaan", "Aditya", "Vihaan", "Arjun", "Sai", "Arnav", "Ayaan",
    "Krishna", "Ishaan", "Shaurya", "Atharv", "Advait", "Pranav", "Dhruv",
    "Ananya", "Diya", "Aadhya", "Saanvi", "Kiara", "Anika", "Myra", "Sara",
    "Navya", "Aarohi", "Pari", "Angel", "Kavya", "Avni", "Prisha",
)

LAST_NAMES = (
    "Sharma", "Verma", "Gupta", "Kumar", "Singh", "Patel", "Reddy", "Nair",
    "Iyer", "Joshi", "Rao", "Agarwal", "Chopra", "Desai", "Mehta", "Khan",
    "Malhotra", "Bose", "Das", "Kapoor", "Banerjee", "Mishra", "Pandey",
)

CITIES = (
    "Mumbai", "Delhi", "Bangalore", "Hyderabad", "Chennai", "Kolkata",
    "Pune", "Ahmedabad", "Jaipur", "Lucknow", "Kochi", "Chandigarh",
)

STATES = (
    "Maharashtra", "Delhi", "Karnataka", "Telangana", "Tamil Nadu",
    "West Bengal", "Gujarat", "Rajasthan", "Uttar Pradesh", "Kerala",
)

STREETS = (
    "MG Road", "Park Street", "Linking Road", "FC Road", "Brigade Road",
    "Commercial Street", "Marine Drive", "Residency Road", "Nehru Place",
)

GENDERS = ("male", "female", "other")

DEFAULT_ROWS = 50_000
CHUNK_SIZE = 10_000


def generate_row(rng: random.Random) -> str:
    street = rng.choice(STREETS)
    values = [
        rng.choice(FIRST_NAMES),
        rng.choice(LAST_NAMES),
        str(rng.randint(15, 75)),
        f"{rng.randint(1, 999)}-{rng.randint(1, 9)} {street}",
        f"Building {rng.randint(1, 50)}",
        rng.choice(CITIES),
        rng.choice(STATES),
        rng.choice(GENDERS),
        f"9{rng.randint(100000000, 999999999)}",
    ]
    return ",".join(values)


def generate_sample(
    path: Path | str,
    rows: int = DEFAULT_ROWS,
    *,
    seed: Optional[int] = None,
) -> Path:
    """Write ``rows`` random users to ``path`` and return the path.

    Rows are written in chunks so the whole file never sits in memory.
    """
    if rows < 0:
        raise ValueError(f"Row count cannot be negative (received {rows})")

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    rng = random.Random(seed)

    with path.open("w", encoding="utf-8", newline="") as fh:
        fh.write(HEADER + "\n")
        for start in range(0, rows, CHUNK_SIZE):
            chunk: List[str] = [
                generate_row(rng) for _ in range(min(CHUNK_SIZE, rows - start))
            ]
            fh.write("\n".join(chunk) + "\n")
    return path
