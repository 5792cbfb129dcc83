from __future__ import annotations

import csv
import io
import json
from typing import Any, Dict, Iterable, Iterator, List


def csv_stream(rows: Iterable[Dict[str, Any]], fieldnames: List[str]) -> Iterator[bytes]:
    """
    Stream CSV as bytes without holding full file in memory.
    Every cell is quoted so names/emails with commas survive spreadsheets.
    """
    buf = io.StringIO()
    writer = csv.DictWriter(buf, fieldnames=fieldnames, extrasaction="ignore", quoting=csv.QUOTE_ALL)
    writer.writeheader()
    yield buf.getvalue().encode("utf-8")
    buf.seek(0)
    buf.truncate(0)

    for r in rows:
        writer.writerow(r)
        yield buf.getvalue().encode("utf-8")
        buf.seek(0)
        buf.truncate(0)


def json_array_stream(key: str, items: Iterable[Dict[str, Any]]) -> Iterator[bytes]:
    # {"<key>": [ ... ]} streamed item by item
    yield f'{{"{key}":['.encode("utf-8")
    first = True
    for item in items:
        if not first:
            yield b","
        first = False
        yield json.dumps(item, ensure_ascii=False, default=str).encode("utf-8")
    yield b"]}"
