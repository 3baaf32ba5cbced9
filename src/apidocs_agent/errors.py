from __future__ import annotations


class ApiDocsError(Exception):
    pass


class InvalidDeclarationError(ApiDocsError):
    """소스를 선언 트리로 만들 수 없음. 해당 파일 한 건에 대해서만 치명적."""

    def __init__(self, source: str, reason: str):
        super().__init__(f"{source}: {reason}")
        self.source = source
        self.reason = reason


class MalformedMarkerError(ApiDocsError):
    def __init__(self, attribute: str, expected: str, actual: str):
        super().__init__(f"marker attribute '{attribute}' expects {expected}, got {actual}")
        self.attribute = attribute
        self.expected = expected
        self.actual = actual


class UnresolvedResponseTypeError(ApiDocsError):
    def __init__(self, method_name: str):
        super().__init__(f"no response type for method '{method_name}'")
        self.method_name = method_name
