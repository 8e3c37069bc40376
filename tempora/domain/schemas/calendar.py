from pydantic import BaseModel

MAIN_CALENDAR_TYPE = "main"


class CalendarRef(BaseModel):
    id: int
    title: str
    type: str

    @property
    def is_main(self) -> bool:
        return self.type == MAIN_CALENDAR_TYPE


class User(BaseModel):
    id: int
    full_name: str | None = None
    email: str | None = None
    profile_picture: str | None = None
