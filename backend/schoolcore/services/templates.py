import io

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.datavalidation import DataValidation

from .schema import get_schema

TEMPLATE_ROWS = 1000
XLSX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

KIND_HINTS = {
    "date": "Date, e.g. 2024-04-15 or 15/04/2024",
    "decimal": "Number",
    "bool": "Yes or No",
    "email": "Email address",
    "phone": "7 to 15 digits",
}


def template_header(spec):
    return spec.name.removesuffix("_override")


def template_filename(entity_type):
    return f"{get_schema(entity_type).entity_type}_import_template.xlsx"


def build_template(entity_type):
    """Workbook with the canonical headers, one example row and an instructions sheet."""
    schema = get_schema(entity_type)
    workbook = Workbook()

    sheet = workbook.active
    sheet.title = schema.label
    sheet.append([template_header(spec) for spec in schema.fields])
    sheet.append([schema.example_row.get(spec.name) for spec in schema.fields])
    sheet.freeze_panes = "A2"
    for index, spec in enumerate(schema.fields, start=1):
        cell = sheet.cell(row=1, column=index)
        cell.font = Font(bold=True)
        sheet.column_dimensions[get_column_letter(index)].width = max(14, len(template_header(spec)) + 4)
        if spec.choices:
            letter = get_column_letter(index)
            choice_list = DataValidation(
                type="list",
                formula1='"{}"'.format(",".join(spec.choices)),
                allow_blank=not spec.required,
            )
            choice_list.error = f"Select a {spec.label.lower()} from the list"
            sheet.add_data_validation(choice_list)
            choice_list.add(f"{letter}2:{letter}{TEMPLATE_ROWS + 1}")

    notes = workbook.create_sheet("Instructions")
    notes.append(["Column", "Field", "Required", "Accepted values"])
    for cell in notes[1]:
        cell.font = Font(bold=True)
    if "grade_override" in schema.field_names:
        notes.append(["grade / section / academic_year", "", "No", "Leave blank to use the values chosen at upload"])
    for spec in schema.fields:
        accepted = ", ".join(spec.choices) if spec.choices else KIND_HINTS.get(spec.kind, "Text")
        notes.append([template_header(spec), spec.label, "Yes" if spec.required else "No", accepted])
    for letter, width in zip("ABCD", (32, 28, 10, 48)):
        notes.column_dimensions[letter].width = width

    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()
