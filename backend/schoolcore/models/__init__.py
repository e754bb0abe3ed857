from .branch import Branch, Grade, Section
from .account import Account
from .student import Student
from .teacher import Teacher
from .import_batch import ImportBatch
from .import_row import StagingRow
from .student_import import StudentImport
from .teacher_import import TeacherImport

__all__ = [
    "Branch",
    "Grade",
    "Section",
    "Account",
    "Student",
    "Teacher",
    "ImportBatch",
    "StagingRow",
    "StudentImport",
    "TeacherImport",
]
