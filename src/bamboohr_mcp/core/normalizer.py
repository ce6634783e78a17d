"""
XML -> model normalization for the BambooHR endpoints that only speak XML.

parse_xml() produces a generic dict tree (xmltodict conventions: attributes
under "@name", element text under "#text"). Each response shape then has its
own extractor, which declares the elements it expects to repeat through
force_list so that a single occurrence still arrives as a list.
"""

from __future__ import annotations

import re
from typing import Any, Dict, Iterable, List, Union
from xml.parsers.expat import ExpatError

import xmltodict

from .errors import BambooHRParseError, EmployeeNotFoundError
from .models import DirectoryEmployee, Employee, TimeOffRequest

ATTR_PREFIX = "@"
TEXT_KEY = "#text"

_INT_RE = re.compile(r"[-+]?\d+")
_FLOAT_RE = re.compile(r"[-+]?(?:\d+\.\d*|\.\d+)(?:[eE][-+]?\d+)?")


def _coerce_number(value: str) -> Union[int, float, str]:
    if _INT_RE.fullmatch(value):
        return int(value)
    if _FLOAT_RE.fullmatch(value):
        return float(value)
    return value


def _convert_attributes(path, key: str, value: Any):
    """xmltodict postprocessor: trim attributes, turn numeric ones into numbers."""
    if key.startswith(ATTR_PREFIX) and isinstance(value, str):
        return key, _coerce_number(value.strip())
    return key, value


def parse_xml(xml_text: Any, *, force_list: Iterable[str] = ()) -> Dict[str, Any]:
    """
    Parse XML into a dict tree.
    - Attributes become "@<name>" keys, numeric values converted
    - Text of elements that also carry attributes lands under "#text"
    - Text is whitespace-trimmed
    - Elements named in force_list are always lists
    """
    if not isinstance(xml_text, str):
        raise BambooHRParseError(
            f"Expected XML text, got {type(xml_text).__name__}."
        )
    try:
        tree = xmltodict.parse(
            xml_text,
            attr_prefix=ATTR_PREFIX,
            cdata_key=TEXT_KEY,
            strip_whitespace=True,
            force_list=tuple(force_list),
            postprocessor=_convert_attributes,
        )
    except ExpatError as exc:
        raise BambooHRParseError(f"Malformed XML response: {exc}") from exc
    return tree or {}


def _text(node: Any) -> str:
    """Text of an element whether xmltodict collapsed it to a string or not."""
    if node is None:
        return ""
    if isinstance(node, dict):
        value = node.get(TEXT_KEY)
        return "" if value is None else str(value)
    return str(node)


def _attr(node: Any, name: str, where: str) -> Any:
    if not isinstance(node, dict) or ATTR_PREFIX + name not in node:
        raise BambooHRParseError(f"Missing '{name}' attribute on {where}.")
    return node[ATTR_PREFIX + name]


# --- who's out ---


def _time_off_request(item: Dict[str, Any]) -> TimeOffRequest:
    if not isinstance(item, dict):
        raise BambooHRParseError("Unexpected calendar item shape.")
    employee = item.get("employee")
    return TimeOffRequest(
        request_id=str(_attr(item.get("request"), "id", "calendar/item/request")),
        employee_id=str(_attr(employee, "id", "calendar/item/employee")),
        employee_name=_text(employee),
        start_date=_text(item.get("start")),
        end_date=_text(item.get("end")),
        type=str(_attr(item, "type", "calendar/item")),
    )


def parse_time_off(xml_text: str) -> List[TimeOffRequest]:
    """
    <calendar>
      <item type="timeOff">
        <request id="55"/>
        <employee id="12">Jane Doe</employee>
        <start>2024-01-01</start><end>2024-01-03</end>
      </item>
    </calendar>
    """
    tree = parse_xml(xml_text, force_list=("item",))
    calendar = tree.get("calendar")
    if not isinstance(calendar, dict) or "item" not in calendar:
        raise BambooHRParseError(
            "Expected calendar/item elements in time-off response."
        )
    return [_time_off_request(item) for item in calendar["item"]]


# --- employee directory ---


def _directory_employee(node: Dict[str, Any]) -> DirectoryEmployee:
    fields: Dict[str, str] = {}
    for field in node.get("field") or []:
        if not isinstance(field, dict):
            continue  # no id attribute
        field_id = field.get(ATTR_PREFIX + "id")
        text = field.get(TEXT_KEY)
        if field_id in (None, "") or text is None:
            continue
        fields[str(field_id)] = str(text)
    return DirectoryEmployee(
        id=int(_attr(node, "id", "directory/employees/employee")), fields=fields
    )


def parse_directory(xml_text: str) -> List[DirectoryEmployee]:
    """
    <directory>
      <fieldset>...</fieldset>
      <employees>
        <employee id="123"><field id="displayName">John Doe</field>...</employee>
      </employees>
    </directory>
    """
    tree = parse_xml(xml_text, force_list=("employee", "field"))
    directory = tree.get("directory")
    if not isinstance(directory, dict):
        raise BambooHRParseError("Expected <directory> root in directory response.")
    employees = directory.get("employees")
    if not isinstance(employees, dict):
        return []
    return [
        _directory_employee(node)
        for node in employees.get("employee") or []
        if isinstance(node, dict)
    ]


# --- single employee ---


def parse_employee(xml_text: str) -> Employee:
    """
    <employee id="10">
      <field id="firstName">Jane</field>
      <field id="lastName">Doe</field>
    </employee>
    """
    tree = parse_xml(xml_text, force_list=("field",))
    employee = tree.get("employee")
    if employee is None:
        raise EmployeeNotFoundError("Employee node not found in XML response")
    if not isinstance(employee, dict):
        raise BambooHRParseError("Employee node carries no id attribute.")

    fields: Dict[str, str] = {}
    for field in employee.get("field") or []:
        if not isinstance(field, dict) or field.get(ATTR_PREFIX + "id") is None:
            continue
        fields[str(field[ATTR_PREFIX + "id"])] = _text(field).strip()

    try:
        employee_id = int(_attr(employee, "id", "employee"))
    except (TypeError, ValueError) as exc:
        raise BambooHRParseError(f"Employee id is not numeric: {exc}") from exc

    return Employee(
        id=employee_id,
        first_name=fields.get("firstName", ""),
        last_name=fields.get("lastName", ""),
        job_title=fields.get("jobTitle", ""),
        department=fields.get("department", ""),
        location=fields.get("location", ""),
        fields=fields,
    )


__all__ = [
    "parse_xml",
    "parse_time_off",
    "parse_directory",
    "parse_employee",
]
