"""Error taxonomy shared by services and the HTTP layer."""


class RecipeFinderError(RuntimeError):
    """Base class for service-layer errors."""


class NotFoundError(RecipeFinderError):
    """Requested entity does not exist."""


class UnauthorizedError(RecipeFinderError):
    """Acting user does not own the entity."""


class AuthenticationError(RecipeFinderError):
    """Credentials or session are invalid."""


class ConflictError(RecipeFinderError):
    """Entity collides with an existing one."""


class RemoteUnavailableError(RecipeFinderError):
    """Remote recipe API failed; always absorbed by the gateway."""


class ValidationError(RecipeFinderError):
    """Caller-supplied data failed shape checks."""

    def __init__(self, errors: dict[str, str]) -> None:
        super().__init__("; ".join(f"{key}: {value}" for key, value in errors.items()))
        self.errors = errors
