"""Diagnostic core for structural data validation.

Tracks validation status across nested values, builds structured issues
with stable paths, resolves their messages through prioritized error maps
and merges child results identically in sync and async execution.
"""

from parse_diagnostics.context import (
    ParseCommon,
    ParseContext,
    ParseParams,
    add_issue_to_context,
    create_root_context,
)
from parse_diagnostics.error_map import (
    ErrorMap,
    ErrorMapContext,
    default_error_map,
    get_error_map,
    reset_error_map,
    set_error_map,
)
from parse_diagnostics.errors import FlattenedErrors, ParseError
from parse_diagnostics.events import (
    LoggingObserver,
    ObservableMixin,
    ValidationEvent,
    ValidationEventType,
    ValidationObserver,
)
from parse_diagnostics.issues import (
    CustomIssue,
    InvalidArgumentsIssue,
    InvalidDateIssue,
    InvalidEnumValueIssue,
    InvalidIntersectionTypesIssue,
    InvalidLiteralIssue,
    InvalidReturnTypeIssue,
    InvalidStringIssue,
    InvalidTypeIssue,
    InvalidUnionDiscriminatorIssue,
    InvalidUnionIssue,
    Issue,
    IssueData,
    NotFiniteIssue,
    NotMultipleOfIssue,
    ParsedType,
    ParsePath,
    TooBigIssue,
    TooSmallIssue,
    UnrecognizedKeysIssue,
    coerce_issue_data,
    get_parsed_type,
    make_issue,
)
from parse_diagnostics.protocols import CheckProtocol, ErrorMapProtocol
from parse_diagnostics.results import (
    INVALID,
    UNDEFINED,
    Dirty,
    Invalid,
    Ok,
    ParseReturn,
    Status,
    SyncParseReturn,
    dirty,
    invalid,
    is_aborted,
    is_async,
    is_dirty,
    is_valid,
    ok,
    result_for,
)
from parse_diagnostics.rich_observers import (
    RichIssueObserver,
    SimpleIssueCounter,
    build_issue_table,
    format_path,
)
from parse_diagnostics.runner import (
    Check,
    ParseOutcome,
    ParseRunner,
    parse,
    parse_async,
    safe_parse,
    safe_parse_async,
)
from parse_diagnostics.status import AsyncObjectPair, ObjectPair, ParseStatus
from parse_diagnostics.writers import IssueReportWriter, IssueWriter, JSONLinesIssueWriter

__all__ = [
    # Result algebra
    "INVALID",
    "UNDEFINED",
    "Dirty",
    "Invalid",
    "Ok",
    "ParseReturn",
    "Status",
    "SyncParseReturn",
    "dirty",
    "invalid",
    "is_aborted",
    "is_async",
    "is_dirty",
    "is_valid",
    "ok",
    "result_for",
    # Error map registry
    "ErrorMap",
    "ErrorMapContext",
    "default_error_map",
    "get_error_map",
    "reset_error_map",
    "set_error_map",
    # Issues
    "CustomIssue",
    "InvalidArgumentsIssue",
    "InvalidDateIssue",
    "InvalidEnumValueIssue",
    "InvalidIntersectionTypesIssue",
    "InvalidLiteralIssue",
    "InvalidReturnTypeIssue",
    "InvalidStringIssue",
    "InvalidTypeIssue",
    "InvalidUnionDiscriminatorIssue",
    "InvalidUnionIssue",
    "Issue",
    "IssueData",
    "NotFiniteIssue",
    "NotMultipleOfIssue",
    "ParsedType",
    "ParsePath",
    "TooBigIssue",
    "TooSmallIssue",
    "UnrecognizedKeysIssue",
    "coerce_issue_data",
    "get_parsed_type",
    "make_issue",
    # Parse context
    "ParseCommon",
    "ParseContext",
    "ParseParams",
    "add_issue_to_context",
    "create_root_context",
    # Parse status
    "AsyncObjectPair",
    "ObjectPair",
    "ParseStatus",
    # Top-level entry points
    "Check",
    "ParseOutcome",
    "ParseRunner",
    "parse",
    "parse_async",
    "safe_parse",
    "safe_parse_async",
    # Error reporting
    "FlattenedErrors",
    "ParseError",
    # Observer pattern
    "LoggingObserver",
    "ObservableMixin",
    "ValidationEvent",
    "ValidationEventType",
    "ValidationObserver",
    # Rich observers
    "RichIssueObserver",
    "SimpleIssueCounter",
    "build_issue_table",
    "format_path",
    # Output writers
    "IssueReportWriter",
    "IssueWriter",
    "JSONLinesIssueWriter",
    # Protocols
    "CheckProtocol",
    "ErrorMapProtocol",
]

__version__ = "0.1.0"
