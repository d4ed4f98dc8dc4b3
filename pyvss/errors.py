class VSSError(ValueError):
    pass


class InvalidThreshold(VSSError):
    pass


class InvalidIdentifier(VSSError):
    pass


class ZeroIdentifier(InvalidIdentifier):
    pass


class DuplicateIdentifier(InvalidIdentifier):
    pass


class VerificationFailed(VSSError):
    pass


class DeserializationError(VSSError):
    pass


class BackendArithmeticError(VSSError):
    pass
