"""Errors raised when handling Ed25519 keys and signatures."""


class Ed25519Error(ValueError):
    """Base class for every error related to Ed25519 signatures."""

    message = "Ed25519 error."

    def __init__(self, message=None):
        super().__init__(message if message is not None else self.message)


class MalformedSecretKey(Ed25519Error):
    """The encoding of a secret key was malformed."""

    message = "Malformed secret key encoding."


class MalformedPublicKey(Ed25519Error):
    """The encoding of a public key was malformed."""

    message = "Malformed public key encoding."


class InvalidSignature(Ed25519Error):
    """Signature verification failed."""

    message = "Invalid signature."


class InvalidSliceLength(Ed25519Error):
    """A byte string of the wrong length was supplied during parsing."""

    message = "Invalid length when parsing byte slice."