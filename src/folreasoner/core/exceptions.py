class FOLReasonerError(Exception):
    """Base class for errors raised by the reasoner."""


class ParseError(FOLReasonerError):
    def __init__(self, position, message):
        super().__init__(f"Parse error at position {position}: {message}")
        self.position = position
        self.message = message


class MalformedFormula(FOLReasonerError):
    def __init__(self, message, formula=None):
        super().__init__(message)
        self.formula = formula


class ArityMismatchError(MalformedFormula):
    def __init__(self, name, expected, got, formula=None):
        super().__init__(f"Symbol {name} used with {got} arguments, previously {expected}", formula)
        self.name = name
        self.expected = expected
        self.got = got


class SymbolKindError(MalformedFormula):
    def __init__(self, name, expected, got, formula=None):
        super().__init__(f"Symbol {name} used as {got}, previously {expected}", formula)
        self.name = name
        self.expected = expected
        self.got = got


class ResourceExhausted(FOLReasonerError):
    def __init__(self, limit_type, statistics=None):
        super().__init__(f"Search stopped by resource limit {limit_type}")
        self.limit_type = limit_type
        self.statistics = statistics


class NoProofAvailable(FOLReasonerError):
    def __init__(self, reason="No successful entailment on the current knowledge base"):
        super().__init__(reason)
        self.reason = reason


class ProofReplayError(FOLReasonerError):
    def __init__(self, index, message):
        super().__init__(f"Proof step {index} does not replay: {message}")
        self.index = index
        self.message = message
