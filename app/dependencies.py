from typing import Annotated

from fastapi import Depends

from app.auth.events import SessionEvents, get_session_events
from app.auth.resolver import AuthFlow, get_auth_flow

# Type aliases for dependency injection
Flow = Annotated[AuthFlow, Depends(get_auth_flow)]
Events = Annotated[SessionEvents, Depends(get_session_events)]
