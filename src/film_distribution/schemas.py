"""
Pydantic parameter and response models for the storage layer
Create models carry the columns a caller may set; Update models are sparse
(only fields explicitly provided are written)
"""
from datetime import datetime
from typing import Optional, List, Any, Dict

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class SparseUpdate(BaseModel):
    """Base for partial updates"""

    def changes(self) -> Dict[str, Any]:
        """Fields the caller explicitly set"""
        return self.model_dump(exclude_unset=True)


# ---------------------------------------------------------------- users

class UserCreate(BaseModel):
    username: str = Field(..., min_length=3)
    password: str = Field(..., description="bcrypt hash, never the plain password")
    email: EmailStr
    name: str = Field(..., min_length=1)
    bio: Optional[str] = None
    profile_image: Optional[str] = None
    is_admin: bool = False


class UserUpdate(SparseUpdate):
    email: Optional[EmailStr] = None
    name: Optional[str] = None
    bio: Optional[str] = None
    profile_image: Optional[str] = None
    stripe_account_id: Optional[str] = None
    verification_status: Optional[str] = None
    verification_documents: Optional[Any] = None
    trust_score: Optional[int] = None
    strikes: Optional[int] = None
    is_banned: Optional[bool] = None
    is_admin: Optional[bool] = None


class FilmmakerSubscriptionUpdate(BaseModel):
    """Subscription fields written when a filmmaker payment completes"""
    stripe_customer_id: Optional[str] = None
    subscription_tier: str
    subscription_start_date: datetime
    subscription_end_date: datetime
    is_active_filmmaker: bool = True


class UserPublic(BaseModel):
    """User as returned over HTTP; the password hash is never included"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    name: str
    bio: Optional[str] = None
    profile_image: Optional[str] = None
    stripe_customer_id: Optional[str] = None
    subscription_tier: Optional[str] = None
    subscription_start_date: Optional[datetime] = None
    subscription_end_date: Optional[datetime] = None
    is_active_filmmaker: bool = False
    verification_status: Optional[str] = None
    trust_score: int = 0
    strikes: int = 0
    is_banned: bool = False
    is_admin: bool = False


# ---------------------------------------------------------------- videos

class VideoCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    user_id: int
    video_url: str
    thumbnail_url: Optional[str] = None
    duration: Optional[int] = Field(None, ge=0)
    extra_metadata: Optional[Dict[str, Any]] = None


class VideoUpdate(SparseUpdate):
    title: Optional[str] = None
    description: Optional[str] = None
    video_url: Optional[str] = None
    thumbnail_url: Optional[str] = None
    duration: Optional[int] = None
    is_published: Optional[bool] = None
    extra_metadata: Optional[Dict[str, Any]] = None
    moderation_status: Optional[str] = None
    moderation_notes: Optional[str] = None
    ai_screening_result: Optional[Dict[str, Any]] = None
    ai_screening_score: Optional[float] = Field(None, ge=0.0, le=1.0)
    moderated_by: Optional[int] = None
    moderated_at: Optional[datetime] = None
    content_rating: Optional[str] = None
    content_warnings: Optional[List[str]] = None


class PlatformCreate(BaseModel):
    name: str
    logo_url: Optional[str] = None
    api_endpoint: Optional[str] = None
    content_policies: Optional[Dict[str, Any]] = None
    restricted_content: Optional[List[str]] = None
    required_documents: Optional[List[str]] = None
    rating_system: Optional[str] = None


class DistributionCreate(BaseModel):
    video_id: int
    platform_id: int
    status: Optional[str] = None
    external_id: Optional[str] = None
    submission_date: Optional[datetime] = None
    approval_date: Optional[datetime] = None
    rejection_reason: Optional[str] = None
    processing_progress: Optional[int] = Field(None, ge=0, le=100)
    last_status_update: Optional[datetime] = None
    distribution_url: Optional[str] = None


class DistributionUpdate(SparseUpdate):
    views: Optional[int] = None
    revenue: Optional[float] = None
    external_id: Optional[str] = None
    processing_progress: Optional[int] = Field(None, ge=0, le=100)
    distribution_url: Optional[str] = None
    rejection_reason: Optional[str] = None


class RevenueCreate(BaseModel):
    video_id: int
    platform_id: int
    amount: float
    views: int = Field(..., ge=0)
    date: Optional[datetime] = None


# ---------------------------------------------------------------- billing

class SubscriptionPlanCreate(BaseModel):
    name: str
    price: int = Field(..., ge=0, description="cents")
    duration_months: int = Field(..., ge=1)
    description: str


class RevenueStatementCreate(BaseModel):
    user_id: int
    month: int = Field(..., ge=1, le=12)
    year: int
    total_revenue: int
    platform_fee: int
    net_revenue: int
    is_paid: bool = False
    payment_date: Optional[datetime] = None
    statement_url: Optional[str] = None


# ---------------------------------------------------------------- moderation

class ContentReportCreate(BaseModel):
    video_id: int
    reporter_id: Optional[int] = None
    report_reason: str
    report_details: Optional[str] = None


class ContentReportUpdate(SparseUpdate):
    status: Optional[str] = None
    reviewed_by: Optional[int] = None
    reviewed_at: Optional[datetime] = None
    resolution: Optional[str] = None


class ModerationQueueCreate(BaseModel):
    video_id: int
    user_id: int
    priority: Optional[str] = None
    ai_screening_completed: Optional[bool] = None
    human_review_required: Optional[bool] = None
    platform_specific_flags: Optional[Dict[str, Any]] = None


class ModerationQueueUpdate(SparseUpdate):
    priority: Optional[str] = None
    ai_screening_completed: Optional[bool] = None
    human_review_required: Optional[bool] = None
    assigned_to: Optional[int] = None
    status: Optional[str] = None
    platform_specific_flags: Optional[Dict[str, Any]] = None


# ---------------------------------------------------------------- contacts

class FilmmakerContactCreate(BaseModel):
    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    film_title: Optional[str] = None
    submission_year: Optional[int] = None
    film_category: Optional[str] = None
    film_festival_year: Optional[int] = None
    additional_info: Optional[Dict[str, Any]] = None
    notes: Optional[str] = None
    tags: Optional[List[str]] = None

    @field_validator('email')
    @classmethod
    def normalize_email(cls, v):
        v = v.strip().lower()
        if "@" not in v:
            raise ValueError("Invalid email address")
        return v


class FilmmakerContactUpdate(SparseUpdate):
    name: Optional[str] = None
    film_title: Optional[str] = None
    submission_year: Optional[int] = None
    film_category: Optional[str] = None
    film_festival_year: Optional[int] = None
    additional_info: Optional[Dict[str, Any]] = None
    notes: Optional[str] = None
    tags: Optional[List[str]] = None
    last_email_opened: Optional[datetime] = None
    last_email_clicked: Optional[datetime] = None


class FilmmakerContactPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    film_title: Optional[str] = None
    submission_year: Optional[int] = None
    film_category: Optional[str] = None
    film_festival_year: Optional[int] = None
    date_added: Optional[datetime] = None
    invitation_sent: bool = False
    invitation_sent_at: Optional[datetime] = None
    last_invitation_sent_at: Optional[datetime] = None
    invitation_count: int = 0
    has_registered: bool = False
    registered_at: Optional[datetime] = None
    notes: Optional[str] = None
    tags: Optional[List[str]] = None


# ---------------------------------------------------------------- magazine

class MagazineSubscriptionCreate(BaseModel):
    user_id: int
    status: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    stripe_subscription_id: Optional[str] = None
    payment_method: Optional[str] = None
    price: Optional[int] = Field(None, ge=0)


class MagazineSubscriptionUpdate(SparseUpdate):
    status: Optional[str] = None
    end_date: Optional[datetime] = None
    stripe_subscription_id: Optional[str] = None
    payment_method: Optional[str] = None
    price: Optional[int] = None
    invoice_sent: Optional[bool] = None
    invoice_sent_date: Optional[datetime] = None
    payment_received: Optional[bool] = None
    payment_received_date: Optional[datetime] = None


class MagazineIssueCreate(BaseModel):
    title: str
    description: Optional[str] = None
    issue_date: datetime
    cover_image_url: Optional[str] = None
    issuu_link: Optional[str] = None
    is_published: bool = False


class MagazineIssueUpdate(SparseUpdate):
    title: Optional[str] = None
    description: Optional[str] = None
    issue_date: Optional[datetime] = None
    cover_image_url: Optional[str] = None
    issuu_link: Optional[str] = None


class MagazineSubscriberInfoCreate(BaseModel):
    subscription_id: int
    full_name: str
    email: EmailStr
    phone_number: str
    mailing_address: str
    city: str
    state: str
    zip_code: str


# ---------------------------------------------------------------- email

class EmailTemplateCreate(BaseModel):
    name: str
    subject: str
    content: str
    created_by: int


class EmailDraftCreate(BaseModel):
    name: str
    subject: str
    content: str
    recipients: Optional[List[str]] = None
    created_by: int
    template_id: Optional[str] = None


class EmailDraftUpdate(SparseUpdate):
    name: Optional[str] = None
    subject: Optional[str] = None
    content: Optional[str] = None
    recipients: Optional[List[str]] = None
    template_id: Optional[str] = None


class EmailSentCreate(BaseModel):
    subject: str
    content: str
    recipients: List[str]
    sent_by: int
    template_id: Optional[str] = None
    status: str = "sent"
