class KCSError(Exception):
    """Base class for every KZG consume set failure.

    `code` is the opaque numeric code surfaced to callers of the program,
    the message is the best-effort diagnostic that gets logged.
    """

    code: int = 1

    def __init__(self, message: str = ""):
        super().__init__(message or type(self).__name__)


# (a) malformed instruction data


class MalformedDataError(KCSError):
    code = 2


# (b) invalid curve data


class InvalidCurveDataError(KCSError):
    code = 3


class DeserializationError(InvalidCurveDataError):
    pass


class CompressionError(InvalidCurveDataError):
    pass


# (c) proof rejected by the pairing check


class InvalidProofError(KCSError):
    code = 4

    def __init__(self, message: str = "InvalidProof"):
        super().__init__(message)


# (d) capacity exceeded


class CapacityError(KCSError):
    code = 5


class InvalidDegreeError(CapacityError):
    def __init__(self, message: str = "InvalidDegree"):
        super().__init__(message)


class TooManyRootsError(CapacityError):
    def __init__(self, message: str = "TooManyRoots"):
        super().__init__(message)


class DegreeTooHighError(CapacityError):
    def __init__(self, message: str = "DegreeTooHigh"):
        super().__init__(message)


class DuplicateRootError(CapacityError):
    pass


# off-chain proof generation


class RootNotFoundError(KCSError):
    code = 6

    def __init__(self, message: str = "RootNotFound"):
        super().__init__(message)


# host account facility


class AccountError(KCSError):
    code = 7


class IncorrectAccountError(AccountError):
    pass


class AccountAlreadyInitializedError(AccountError):
    pass


class InsufficientFundsError(AccountError):
    pass


class ProgramError(Exception):
    """What the host sees when an instruction fails: a numeric code.

    The underlying `KCSError` stays reachable through `__cause__`.
    """

    def __init__(self, code: int, message: str = ""):
        self.code = code
        super().__init__(f"custom program error: {code}" + (f" ({message})" if message else ""))
