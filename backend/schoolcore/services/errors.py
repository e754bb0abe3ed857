class ImportPipelineError(Exception):
    """Base for every failure the import pipeline reports to its caller."""

    code = "import_error"
    status_code = 400
    default_message = "The import could not be processed."

    def __init__(self, message=None, errors=None):
        self.message = message or self.default_message
        self.errors = errors or {}
        super().__init__(self.message)

    def as_dict(self):
        payload = {
            "success": False,
            "error": self.code,
            "message": self.message,
        }
        if self.errors:
            payload["errors"] = self.errors
        return payload


class ValidationFailed(ImportPipelineError):
    code = "validation_failed"
    status_code = 422
    default_message = "The request is missing or has invalid fields."


class FileError(ImportPipelineError):
    code = "file_error"
    status_code = 422


class FileNotFound(FileError):
    code = "file_not_found"
    status_code = 404
    default_message = "The uploaded file for this batch no longer exists."


class FileTypeMismatch(FileError):
    code = "file_type_mismatch"
    status_code = 415
    default_message = "The file contents do not match its extension."


class EmptyFile(FileError):
    code = "empty_file"
    default_message = "The uploaded file is empty."


class NoHeaders(FileError):
    code = "no_headers"
    default_message = "The first row of the file has no column headers."


EmptyHeaderRow = NoHeaders


class NoDataRows(FileError):
    code = "no_data_rows"
    default_message = "The file has headers but no data rows."


class ParseFailure(FileError):
    code = "parse_failure"
    default_message = "The file could not be read."


class TooManyRows(ParseFailure):
    code = "too_many_rows"


class ParseTimeout(ParseFailure):
    code = "parse_timeout"
    default_message = "Reading the file took too long; split it into smaller files."


class BatchNotFound(ImportPipelineError):
    code = "batch_not_found"
    status_code = 404
    default_message = "Import batch not found."


class InvalidBatchState(ImportPipelineError):
    code = "invalid_batch_state"
    status_code = 409


class CommitConflict(InvalidBatchState):
    code = "commit_conflict"


class PartialCommitFailure(ImportPipelineError):
    code = "partial_commit_failure"
    status_code = 207

    def __init__(self, message=None, errors=None, result=None):
        super().__init__(message, errors)
        self.result = result

    def as_dict(self):
        payload = super().as_dict()
        if self.result is not None:
            payload["data"] = self.result.as_dict()
        return payload
