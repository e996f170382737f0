class CAIPError(ValueError):
    pass


class CAIPFormatError(CAIPError):
    """Identifier does not match the CAIP grammar (segment count or field pattern)."""
    pass


class UnsupportedIdentifierError(CAIPError):
    """Identifier is well-formed but violates a namespace rule."""
    pass


class VerificationError(CAIPError):
    """Failure after a successful parse while confirming an identifier externally."""
    pass


class RpcError(VerificationError):
    pass


class RpcFallbackError(VerificationError):
    pass


class HorizonError(VerificationError):
    pass
