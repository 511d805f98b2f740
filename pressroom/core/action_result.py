"""Action Result — the structured outcome every write action returns.

Invariants:
    - success=True ⇔ error is None
    - Write actions never raise; every failure path is an ActionResult
"""

from dataclasses import dataclass

from pressroom.core.errors import PressroomError


@dataclass(frozen=True)
class ActionError:
    code: str
    message: str
    http_status: int


@dataclass(frozen=True)
class ActionResult:
    success: bool
    error: ActionError | None = None
    slug: str | None = None

    @classmethod
    def ok(cls, slug: str | None = None) -> "ActionResult":
        return cls(success=True, slug=slug)

    @classmethod
    def failed(cls, exc: PressroomError) -> "ActionResult":
        return cls(
            success=False,
            error=ActionError(
                code=exc.code, message=exc.message, http_status=exc.http_status,
            ),
        )

    @property
    def error_code(self) -> str | None:
        return self.error.code if self.error else None

    def to_response(self) -> dict:
        body: dict = {"success": self.success}
        if self.error:
            body["error"] = {"code": self.error.code, "message": self.error.message}
        if self.slug is not None:
            body["slug"] = self.slug
        return body
