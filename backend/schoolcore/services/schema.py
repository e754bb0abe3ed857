"""
Per-entity import schemas.

Each entity type the pipeline accepts is described once here: the canonical
staging fields, the header synonyms that resolve to them, how their values are
typed, which are required, what must be unique, and which fields flow into the
production profile on commit.
"""
from dataclasses import dataclass, field

from schoolcore.models import Student, StudentImport, Teacher, TeacherImport

from .errors import ValidationFailed

GENDER_CHOICES = ("Male", "Female", "Other")
EMPLOYEE_TYPE_CHOICES = ("Permanent", "Contract", "Visiting", "Temporary")

# Values accepted for choice fields, keyed by their lower-cased spelling.
CHOICE_ALIASES = {
    "gender": {
        "male": "Male",
        "m": "Male",
        "boy": "Male",
        "female": "Female",
        "f": "Female",
        "girl": "Female",
        "other": "Other",
        "o": "Other",
    },
    "employee_type": {
        "permanent": "Permanent",
        "regular": "Permanent",
        "full_time": "Permanent",
        "contract": "Contract",
        "contractual": "Contract",
        "visiting": "Visiting",
        "guest": "Visiting",
        "temporary": "Temporary",
        "temp": "Temporary",
    },
}


@dataclass(frozen=True)
class FieldSpec:
    name: str
    label: str
    kind: str = "text"
    synonyms: tuple = ()
    required: bool = False
    max_length: int = 255
    choices: tuple = ()


@dataclass(frozen=True)
class EntitySchema:
    entity_type: str
    label: str
    role: str
    staging_model: type
    profile_model: type
    fields: tuple
    # (staging field, production lookup) pairs checked against live tables.
    production_unique: tuple
    batch_unique: tuple
    profile_fields: tuple
    context_fields: tuple = ()
    description: str = ""
    example_row: dict = field(default_factory=dict)

    def field(self, name):
        for spec in self.fields:
            if spec.name == name:
                return spec
        raise KeyError(name)

    @property
    def field_names(self):
        return tuple(spec.name for spec in self.fields)

    @property
    def required_fields(self):
        return tuple(spec for spec in self.fields if spec.required)

    def fields_of_kind(self, *kinds):
        return tuple(spec for spec in self.fields if spec.kind in kinds)


def _f(name, label, kind="text", synonyms=(), required=False, max_length=255, choices=()):
    return FieldSpec(
        name=name,
        label=label,
        kind=kind,
        synonyms=(name,) + tuple(synonyms),
        required=required,
        max_length=max_length,
        choices=choices,
    )


# Headers that carry "First Last" in one column; split by the normalizer.
FULL_NAME_SYNONYMS = ("full_name", "name", "student_name", "teacher_name", "employee_name")

STUDENT_FIELDS = (
    _f("first_name", "First name", synonyms=("firstname", "fname", "given_name", "student_first_name"), required=True, max_length=150),
    _f("last_name", "Last name", synonyms=("lastname", "lname", "surname", "family_name", "student_last_name"), required=True, max_length=150),
    _f("email", "Email", kind="email", synonyms=("email_address", "e_mail", "student_email", "mail_id"), required=True, max_length=254),
    _f("phone", "Phone", kind="phone", synonyms=("phone_number", "mobile", "mobile_number", "mobile_no", "contact_number", "student_phone"), max_length=20),
    _f("admission_number", "Admission number", synonyms=("admission_no", "adm_no", "admission_id", "enrollment_number", "enrolment_number", "enrollment_no"), required=True, max_length=50),
    _f("admission_date", "Admission date", kind="date", synonyms=("date_of_admission", "doa", "admitted_on"), required=True),
    _f("roll_number", "Roll number", synonyms=("roll_no", "roll"), max_length=50),
    _f("registration_number", "Registration number", synonyms=("registration_no", "reg_no", "reg_number"), max_length=50),
    _f("grade_override", "Grade", synonyms=("grade", "class", "standard", "class_name", "std"), max_length=50),
    _f("section_override", "Section", synonyms=("section", "division", "div"), max_length=50),
    _f("academic_year_override", "Academic year", synonyms=("academic_year", "session", "academic_session"), max_length=20),
    _f("stream", "Stream", max_length=50),
    _f("date_of_birth", "Date of birth", kind="date", synonyms=("dob", "birth_date", "birthdate", "birthday", "d_o_b"), required=True),
    _f("gender", "Gender", kind="choice", synonyms=("sex",), required=True, max_length=10, choices=GENDER_CHOICES),
    _f("blood_group", "Blood group", synonyms=("blood_type", "bloodgroup"), max_length=5),
    _f("religion", "Religion", max_length=50),
    _f("category", "Category", synonyms=("caste_category", "social_category", "caste"), max_length=50),
    _f("nationality", "Nationality", synonyms=("citizenship",), max_length=50),
    _f("mother_tongue", "Mother tongue", synonyms=("first_language", "native_language"), max_length=50),
    _f("current_address", "Current address", kind="longtext", synonyms=("address", "residential_address", "address_line", "present_address"), required=True),
    _f("permanent_address", "Permanent address", kind="longtext", synonyms=("home_address",)),
    _f("city", "City", synonyms=("town", "city_name"), required=True, max_length=100),
    _f("state", "State", synonyms=("province", "state_name"), required=True, max_length=100),
    _f("country", "Country", max_length=100),
    _f("pincode", "Pincode", synonyms=("pin_code", "postal_code", "postcode", "zip", "zip_code", "pin"), required=True, max_length=10),
    _f("father_name", "Father name", synonyms=("fathers_name", "father", "father_full_name"), required=True, max_length=150),
    _f("father_phone", "Father phone", kind="phone", synonyms=("fathers_phone", "father_mobile", "father_contact", "father_phone_number"), required=True, max_length=20),
    _f("father_email", "Father email", kind="email", synonyms=("fathers_email", "father_email_address"), max_length=150),
    _f("father_occupation", "Father occupation", synonyms=("fathers_occupation",), max_length=100),
    _f("father_annual_income", "Father annual income", kind="decimal", synonyms=("father_income", "fathers_income")),
    _f("mother_name", "Mother name", synonyms=("mothers_name", "mother", "mother_full_name"), required=True, max_length=150),
    _f("mother_phone", "Mother phone", kind="phone", synonyms=("mothers_phone", "mother_mobile", "mother_contact", "mother_phone_number"), max_length=20),
    _f("mother_email", "Mother email", kind="email", synonyms=("mothers_email", "mother_email_address"), max_length=150),
    _f("mother_occupation", "Mother occupation", synonyms=("mothers_occupation",), max_length=100),
    _f("mother_annual_income", "Mother annual income", kind="decimal", synonyms=("mother_income", "mothers_income")),
    _f("guardian_name", "Guardian name", synonyms=("guardian", "guardians_name"), max_length=150),
    _f("guardian_relation", "Guardian relation", synonyms=("guardian_relationship",), max_length=50),
    _f("guardian_phone", "Guardian phone", kind="phone", synonyms=("guardians_phone", "guardian_mobile", "guardian_contact"), max_length=20),
    _f("emergency_contact_name", "Emergency contact name", synonyms=("emergency_contact", "emergency_name"), required=True, max_length=150),
    _f("emergency_contact_phone", "Emergency contact phone", kind="phone", synonyms=("emergency_phone", "emergency_contact_number", "emergency_mobile"), required=True, max_length=20),
    _f("emergency_contact_relation", "Emergency contact relation", synonyms=("emergency_relation", "emergency_contact_relationship"), max_length=50),
    _f("previous_school", "Previous school", synonyms=("last_school", "previous_school_name", "school_last_attended")),
    _f("previous_grade", "Previous grade", synonyms=("last_grade", "previous_class"), max_length=50),
    _f("previous_percentage", "Previous percentage", kind="decimal", synonyms=("last_percentage", "previous_marks", "percentage")),
    _f("transfer_certificate_number", "Transfer certificate number", synonyms=("tc_number", "tc_no", "transfer_certificate_no"), max_length=50),
    _f("medical_history", "Medical history", kind="longtext", synonyms=("medical_conditions", "health_history")),
    _f("allergies", "Allergies", kind="longtext", synonyms=("allergy",)),
    _f("medications", "Medications", kind="longtext", synonyms=("medication", "medicines")),
    _f("height_cm", "Height (cm)", kind="decimal", synonyms=("height",)),
    _f("weight_kg", "Weight (kg)", kind="decimal", synonyms=("weight",)),
    _f("password", "Password", synonyms=("initial_password", "login_password"), max_length=128),
    _f("remarks", "Remarks", kind="longtext", synonyms=("notes", "comments", "remark")),
)

TEACHER_FIELDS = (
    _f("first_name", "First name", synonyms=("firstname", "fname", "given_name"), required=True, max_length=150),
    _f("last_name", "Last name", synonyms=("lastname", "lname", "surname", "family_name"), required=True, max_length=150),
    _f("email", "Email", kind="email", synonyms=("email_address", "e_mail", "official_email", "mail_id"), required=True, max_length=254),
    _f("phone", "Phone", kind="phone", synonyms=("phone_number", "mobile", "mobile_number", "mobile_no", "contact_number"), max_length=20),
    _f("employee_id", "Employee ID", synonyms=("emp_id", "employee_code", "emp_code", "staff_id", "employee_number", "employee_no", "teacher_id"), required=True, max_length=50),
    _f("joining_date", "Joining date", kind="date", synonyms=("date_of_joining", "doj", "join_date", "joined_on"), required=True),
    _f("leaving_date", "Leaving date", kind="date", synonyms=("date_of_leaving", "relieving_date", "exit_date")),
    _f("designation", "Designation", synonyms=("position", "job_title"), required=True, max_length=100),
    _f("employee_type", "Employee type", kind="choice", synonyms=("employment_type", "emp_type", "contract_type", "staff_type"), required=True, max_length=10, choices=EMPLOYEE_TYPE_CHOICES),
    _f("qualification", "Qualification", kind="longtext", synonyms=("qualifications", "education", "highest_qualification")),
    _f("experience_years", "Experience (years)", kind="decimal", synonyms=("experience", "years_of_experience", "total_experience", "exp_years")),
    _f("specialization", "Specialization", synonyms=("specialisation", "area_of_expertise"), max_length=150),
    _f("registration_number", "Registration number", synonyms=("registration_no", "reg_no", "teacher_registration_number"), max_length=50),
    _f("subjects", "Subjects", kind="longtext", synonyms=("subject", "subjects_taught")),
    _f("classes_assigned", "Classes assigned", kind="longtext", synonyms=("classes", "assigned_classes")),
    _f("is_class_teacher", "Class teacher", kind="bool", synonyms=("class_teacher",)),
    _f("class_teacher_of_grade", "Class teacher of grade", synonyms=("class_teacher_grade",), max_length=50),
    _f("class_teacher_of_section", "Class teacher of section", synonyms=("class_teacher_section",), max_length=50),
    _f("date_of_birth", "Date of birth", kind="date", synonyms=("dob", "birth_date", "birthdate", "birthday", "d_o_b"), required=True),
    _f("gender", "Gender", kind="choice", synonyms=("sex",), required=True, max_length=10, choices=GENDER_CHOICES),
    _f("blood_group", "Blood group", synonyms=("blood_type", "bloodgroup"), max_length=5),
    _f("religion", "Religion", max_length=50),
    _f("nationality", "Nationality", synonyms=("citizenship",), max_length=50),
    _f("current_address", "Current address", kind="longtext", synonyms=("address", "residential_address", "address_line", "present_address"), required=True),
    _f("permanent_address", "Permanent address", kind="longtext", synonyms=("home_address",)),
    _f("city", "City", synonyms=("town", "city_name"), max_length=100),
    _f("state", "State", synonyms=("province", "state_name"), max_length=100),
    _f("pincode", "Pincode", synonyms=("pin_code", "postal_code", "postcode", "zip", "zip_code", "pin"), max_length=10),
    _f("emergency_contact_name", "Emergency contact name", synonyms=("emergency_contact", "emergency_name"), max_length=150),
    _f("emergency_contact_phone", "Emergency contact phone", kind="phone", synonyms=("emergency_phone", "emergency_contact_number", "emergency_mobile"), max_length=20),
    _f("emergency_contact_relation", "Emergency contact relation", synonyms=("emergency_relation", "emergency_contact_relationship"), max_length=50),
    _f("salary_grade", "Salary grade", synonyms=("pay_grade", "pay_scale"), max_length=50),
    _f("basic_salary", "Basic salary", kind="decimal", synonyms=("salary", "basic_pay", "monthly_salary"), required=True),
    _f("bank_name", "Bank name", synonyms=("bank",), max_length=100),
    _f("bank_account_number", "Bank account number", synonyms=("account_number", "account_no", "bank_account", "bank_account_no"), max_length=50),
    _f("bank_ifsc_code", "Bank IFSC code", synonyms=("ifsc", "ifsc_code", "bank_ifsc"), max_length=20),
    _f("pan_number", "PAN number", synonyms=("pan", "pan_no", "pan_card"), max_length=20),
    _f("aadhar_number", "Aadhaar number", synonyms=("aadhar", "aadhaar", "aadhaar_number", "aadhar_no", "aadhaar_no"), max_length=20),
    _f("password", "Password", synonyms=("initial_password", "login_password"), max_length=128),
    _f("remarks", "Remarks", kind="longtext", synonyms=("notes", "comments", "remark")),
)

STUDENT_SCHEMA = EntitySchema(
    entity_type="student",
    label="Students",
    role="student",
    staging_model=StudentImport,
    profile_model=Student,
    fields=STUDENT_FIELDS,
    production_unique=(
        ("email", "account__email"),
        ("phone", "account__phone"),
        ("admission_number", "profile__admission_number"),
    ),
    batch_unique=("email", "phone", "admission_number"),
    profile_fields=(
        "admission_number",
        "admission_date",
        "roll_number",
        "registration_number",
        "grade",
        "section",
        "academic_year",
        "stream",
        "date_of_birth",
        "gender",
        "blood_group",
        "religion",
        "category",
        "nationality",
        "mother_tongue",
        "current_address",
        "permanent_address",
        "city",
        "state",
        "country",
        "pincode",
        "father_name",
        "father_phone",
        "father_email",
        "father_occupation",
        "father_annual_income",
        "mother_name",
        "mother_phone",
        "mother_email",
        "mother_occupation",
        "mother_annual_income",
        "guardian_name",
        "guardian_relation",
        "guardian_phone",
        "emergency_contact_name",
        "emergency_contact_phone",
        "emergency_contact_relation",
        "previous_school",
        "previous_grade",
        "previous_percentage",
        "transfer_certificate_number",
        "medical_history",
        "allergies",
        "medications",
        "height_cm",
        "weight_kg",
        "remarks",
    ),
    context_fields=("branch", "grade", "section", "academic_year"),
    description="Import student records with admission details",
    example_row={
        "first_name": "John",
        "last_name": "Doe",
        "email": "john.doe@example.com",
        "phone": "9876543210",
        "admission_number": "STU-2024-001",
        "admission_date": "2024-04-15",
        "roll_number": "101",
        "date_of_birth": "2014-05-20",
        "gender": "Male",
        "blood_group": "A+",
        "current_address": "123 Main Street",
        "city": "Mumbai",
        "state": "Maharashtra",
        "country": "India",
        "pincode": "400001",
        "father_name": "Rajesh Doe",
        "father_phone": "9876543210",
        "father_email": "rajesh@example.com",
        "mother_name": "Priya Doe",
        "mother_phone": "9876543211",
        "emergency_contact_name": "Rajesh Doe",
        "emergency_contact_phone": "9876543210",
        "remarks": "Good student",
    },
)

TEACHER_SCHEMA = EntitySchema(
    entity_type="teacher",
    label="Teachers",
    role="teacher",
    staging_model=TeacherImport,
    profile_model=Teacher,
    fields=TEACHER_FIELDS,
    production_unique=(
        ("email", "account__email"),
        ("phone", "account__phone"),
        ("employee_id", "profile__employee_id"),
    ),
    batch_unique=("email", "phone", "employee_id"),
    profile_fields=(
        "employee_id",
        "joining_date",
        "leaving_date",
        "designation",
        "employee_type",
        "qualification",
        "experience_years",
        "specialization",
        "registration_number",
        "subjects",
        "classes_assigned",
        "is_class_teacher",
        "class_teacher_of_grade",
        "class_teacher_of_section",
        "date_of_birth",
        "gender",
        "blood_group",
        "religion",
        "nationality",
        "current_address",
        "permanent_address",
        "city",
        "state",
        "pincode",
        "emergency_contact_name",
        "emergency_contact_phone",
        "emergency_contact_relation",
        "salary_grade",
        "basic_salary",
        "bank_name",
        "bank_account_number",
        "bank_ifsc_code",
        "pan_number",
        "aadhar_number",
        "remarks",
    ),
    context_fields=("branch",),
    description="Import teacher records with employment details",
    example_row={
        "first_name": "Jane",
        "last_name": "Smith",
        "email": "jane.smith@example.com",
        "phone": "9876543212",
        "employee_id": "TCH-2024-001",
        "joining_date": "2024-01-01",
        "designation": "Senior Teacher",
        "employee_type": "Permanent",
        "date_of_birth": "1985-03-15",
        "gender": "Female",
        "current_address": "456 Park Avenue",
        "city": "Delhi",
        "state": "Delhi",
        "pincode": "110001",
        "basic_salary": "50000",
        "emergency_contact_name": "John Smith",
        "emergency_contact_phone": "9876543213",
        "remarks": "Excellent teacher",
    },
)

SCHEMAS = {
    STUDENT_SCHEMA.entity_type: STUDENT_SCHEMA,
    TEACHER_SCHEMA.entity_type: TEACHER_SCHEMA,
}


def get_schema(entity_type):
    schema = SCHEMAS.get((entity_type or "").strip().lower())
    if schema is None:
        raise ValidationFailed(
            "Unknown import entity type.",
            errors={"entity": [f"Expected one of: {', '.join(SCHEMAS)}."]},
        )
    return schema
