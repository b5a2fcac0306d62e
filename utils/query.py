import math
from typing import Dict, Mapping, Union

QueryValue = Union[str, int, float, bool]


def to_number(raw: str) -> Union[int, float]:
    """
    Coerce a query-string value to a number

    Args:
        raw: The string value

    Returns:
        int for integral values, float otherwise, NaN when not numeric
    """
    text = raw.strip()
    if not text:
        return 0

    # float() accepts digit separators, which a query string should not
    if "_" in text:
        return math.nan

    # unsigned hex, binary and octal literals, e.g. 0x10, 0b101, 0o7
    if text[:2].lower() in ("0x", "0b", "0o"):
        try:
            return int(text, 0)
        except ValueError:
            return math.nan

    # plain integers are parsed exactly; float() would round large ones
    try:
        return int(text)
    except ValueError:
        pass

    try:
        value = float(text)
    except ValueError:
        return math.nan

    if value.is_integer():
        return int(value)
    return value


def normalize_job_query(raw_query: Mapping[str, str]) -> Dict[str, QueryValue]:
    """
    Convert raw query parameters for the job list into their semantic types

    minSalary becomes a number (NaN when not numeric, left for the validator
    to reject). hasEquity is True only for the exact string "true"; anything
    else, including "1" and "TRUE", is False. Other keys pass through.

    Args:
        raw_query: Query-string keys mapped to their string values

    Returns:
        A new mapping; the input is left untouched
    """
    query: Dict[str, QueryValue] = dict(raw_query)

    if "minSalary" in query:
        query["minSalary"] = to_number(raw_query["minSalary"])

    if "hasEquity" in query:
        query["hasEquity"] = raw_query["hasEquity"] == "true"

    return query
