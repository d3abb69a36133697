"""Parse the tabular station listing of a railway line from an HTML page."""

import re

NO_PASSENGER_MARKER = "连接"


def html_table_lines(html: str, line_name: str) -> list[str]:
    """
    Flatten HTML table rows into ``|``-separated text lines.

    Only lines mentioning ``line_name`` are kept.
    """
    text = re.sub(r"<tr[^>]*>|</tr>", "\n", html, flags=re.IGNORECASE)
    text = re.sub(r"</?t[dh][^>]*>", "|", text, flags=re.IGNORECASE)
    text = re.sub(r"<[^>]+>", " ", text)
    lines = (line.strip() for line in text.split("\n"))
    return [line for line in lines if line_name in line]


def parse_station_listing(html: str, line_name: str) -> list[dict]:
    """
    Extract station records for one line.

    Rows are expected as: line name, station name, two ignored columns,
    station code. A row containing the junction marker is a station without
    passenger service. Locations are unknown at this stage and set to 0, 0.

    Returns:
        Station records in artifact shape (camelCase keys)
    """
    stations = []
    for line in html_table_lines(html, line_name):
        cols = [c.strip() for c in line.split("|")]
        cols = [c for c in cols if c]
        if len(cols) < 5:
            continue
        row_line, station_name, _, _, station_code = cols[:5]
        if row_line != line_name or not station_name or not station_code:
            continue

        stations.append({
            "id": station_code,
            "nameLocal": station_name,
            "nameRomaji": station_name,
            "nameEnglish": station_name,
            "location": {"latitude": 0, "longitude": 0},
            "hasPassengerService": NO_PASSENGER_MARKER not in cols,
        })
    return stations
