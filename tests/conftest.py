from __future__ import annotations

from pathlib import Path

import pytest

HEADER = "order,id,date,time,title,url,visitCount,typedCount,transition"

# 2023-02-03: 15 minutes of work between 07:05 and 08:00.
# 2023-02-04: no visits at all.
# 2023-02-05: only long gaps, no work inferred.
# 2023-02-06: 10 minutes of work between 08:00 and 08:10; 12:00 is the last
#             visit of the export and yields no record.
SAMPLE_VISITS = [
    ("2023-02-03", "06:30:00", "News", "https://news.example.com/"),
    ("2023-02-03", "06:40:00", "Weather", "https://weather.example.com/"),
    ("2023-02-03", "07:05:00", "Inbox", "https://mail.example.com/"),
    ("2023-02-03", "07:10:00", "Ticket 42", "https://tracker.example.com/42"),
    ("2023-02-03", "07:15:00", "Wiki", "https://wiki.example.com/"),
    ("2023-02-03", "07:50:00", "Ticket 43", "https://tracker.example.com/43"),
    ("2023-02-03", "08:00:00", "Docs", "https://docs.example.com/"),
    ("2023-02-03", "08:15:00", "Lunch menu", "https://canteen.example.com/"),
    ("2023-02-03", "09:00:00", "Inbox", "https://mail.example.com/"),
    ("2023-02-05", "10:00:00", "Recipes", "https://cooking.example.com/"),
    ("2023-02-05", "11:00:00", "Football", "https://sports.example.com/"),
    ("2023-02-06", "08:00:00", "Inbox", "https://mail.example.com/"),
    ("2023-02-06", "08:10:00", "Ticket 44", "https://tracker.example.com/44"),
    ("2023-02-06", "08:25:00", "Wiki", "https://wiki.example.com/"),
    ("2023-02-06", "12:00:00", "Inbox", "https://mail.example.com/"),
]


def render_csv(visits) -> str:
    lines = [HEADER]
    for index, (day, clock, title, url) in enumerate(visits, start=1):
        lines.append(f"{index},{1000 + index},{day},{clock},{title},{url},1,0,link")
    return "\n".join(lines) + "\n"


@pytest.fixture
def write_history(tmp_path: Path):
    def _write(visits=SAMPLE_VISITS, name: str = "history.csv") -> Path:
        path = tmp_path / name
        path.write_text(render_csv(visits), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def history_csv(write_history) -> Path:
    return write_history()
