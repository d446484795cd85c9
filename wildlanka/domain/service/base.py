"""Base class for domain services."""


class Service:
    """Domain logic spanning the account aggregate and its collaborators.

    Services hold repositories and ports only; they keep no per-request state.
    """
