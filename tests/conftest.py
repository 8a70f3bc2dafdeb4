import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

from nestedcsv import database


SAMPLE_CSV = (
    "name.firstName,name.lastName,age,address.city,address.state,gender,phone\n"
    "Aarav,Sharma,30,Mumbai,Maharashtra,male,9123456789\n"
    "Priya,Patel,17,Ahmedabad,Gujarat,female,9988776655\n"
    "Rahul,Verma,45,Delhi,Delhi,male,9000000001\n"
    "Sneha,Iyer,62,Chennai,Tamil Nadu,female,9000000002\n"
)


@pytest.fixture()
def sqlite_connection(tmp_path):
    db_path = tmp_path / "test.db"
    database.init_db(db_path)
    conn = database.get_connection(db_path)
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture()
def sample_csv(tmp_path) -> Path:
    path = tmp_path / "users.csv"
    path.write_text(SAMPLE_CSV, encoding="utf-8")
    return path
