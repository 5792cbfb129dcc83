from app.schemas.auth import AdminLoginRequest, ParticipantLoginRequest, TokenResponse
from app.schemas.participants import ParticipantRegister, ParticipantUpdate
from app.schemas.selections import SelectionCreate
from app.schemas.events import EventCreate, EventUpdate
from app.schemas.stats import StatsResponse
