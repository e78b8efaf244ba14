from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any

from selfsight.features.entries.models import DiaryEntry
from selfsight.features.profiles.models import UserProfile

# =========================================================================
# ACCOUNT MODELS
# =========================================================================

class SignupRequest(BaseModel):
    name: str
    email: str
    password: str

class LoginRequest(BaseModel):
    email: str
    password: str

class ResetPasswordRequest(BaseModel):
    email: str

class ProfileResponse(BaseModel):
    status: str
    profile: UserProfile
    is_new_user: bool

# =========================================================================
# ENTRY MODELS
# =========================================================================

# Title/content are checked by the entry store so blank values get the
# same message as missing ones.
class CreateEntryRequest(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None
    tags: List[str] = Field(default_factory=list)

class UpdateEntryRequest(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None
    tags: List[str] = Field(default_factory=list)

class EntriesResponse(BaseModel):
    status: str
    entries: List[DiaryEntry]
    groups: Dict[str, List[str]] = Field(default_factory=dict)  # day label -> entry ids
    degraded: bool = False
    notice: Optional[str] = None

class EntryResponse(BaseModel):
    status: str
    entry: DiaryEntry
    degraded: bool = False
    notice: Optional[str] = None

class TagsResponse(BaseModel):
    status: str
    tags: List[str]

# =========================================================================
# RECOMMENDATION MODELS
# =========================================================================

class VoteRequest(BaseModel):
    helpful: Optional[bool] = None  # null clears the vote

# =========================================================================
# SERVER FUNCTION MODELS
# =========================================================================

class AnalyzeJournalRequest(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None

class GenerateRecommendationsRequest(BaseModel):
    entries: Optional[List[Dict[str, Any]]] = None
