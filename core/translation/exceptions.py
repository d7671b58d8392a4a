"""
Translate Gateway Custom Exceptions
"""


class TranslateGatewayError(Exception):
    """Base exception for the translate gateway"""
    pass


class EngineFailure(TranslateGatewayError):
    """A single engine could not produce a translation"""
    def __init__(self, engine_id: str, reason: str):
        self.engine_id = engine_id
        self.reason = reason
        super().__init__(f"[{engine_id}] {reason}")


class EngineDiscoveryError(TranslateGatewayError):
    """The engine listing could not be obtained"""
    pass


class EmptyCatalogError(TranslateGatewayError):
    """No engines were discovered, so no translation is ever possible"""
    pass


class CacheFailure(TranslateGatewayError):
    """The cache store is unreachable or erroring"""
    def __init__(self, operation: str, language: str, word: str, cause: BaseException):
        self.operation = operation
        self.language = language
        self.word = word
        self.cause = cause
        super().__init__(f"{operation} {language}/{word} failed: {cause!r}")


class CacheReadFailure(CacheFailure):
    def __init__(self, language: str, word: str, cause: BaseException):
        super().__init__("HGET", language, word, cause)


class CacheWriteFailure(CacheFailure):
    def __init__(self, language: str, word: str, cause: BaseException):
        super().__init__("HSET", language, word, cause)


class TranslationNotFound(TranslateGatewayError):
    """Every engine in the catalog failed for this word"""
    def __init__(self, language: str, word: str):
        self.language = language
        self.word = word
        super().__init__(f"No translation available for '{word}' to '{language}'")


class MalformedRequest(TranslateGatewayError):
    """The request path does not carry a usable word and language"""
    pass
