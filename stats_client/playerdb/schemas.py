"""PlayerDB API schemas."""

from pydantic import BaseModel, ConfigDict


class PlayerDbPlayer(BaseModel):
    """Minecraft account as reported by PlayerDB."""

    model_config = ConfigDict(extra="ignore")

    username: str
    id: str
    raw_id: str | None = None

    @property
    def uuid(self) -> str:
        """Undashed lowercase UUID."""
        return (self.raw_id or self.id).replace("-", "").lower()


class PlayerDbResponse(BaseModel):
    """Envelope around a PlayerDB lookup."""

    model_config = ConfigDict(extra="ignore")

    code: str
    success: bool = False
    message: str | None = None
    data: dict = {}
