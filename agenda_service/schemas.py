from typing import Optional

from pydantic import BaseModel


class GenerateImageRequest(BaseModel):
    # Both are required; presence is checked in the route so the error uses the API envelope
    htmlContent: Optional[str] = None
    filename: Optional[str] = None


class GenerateImageResponse(BaseModel):
    success: bool = True
    imageUrl: str
    processingTime: int
    message: str = "Image generated and uploaded successfully"


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    processingTime: Optional[int] = None


class HealthResponse(BaseModel):
    status: str
    timestamp: str
    uptime: float
    memory: dict
    browserConnected: bool


class JobEnqueuedResponse(BaseModel):
    jobId: str
    status: str = "queued"


class JobStatusResponse(BaseModel):
    jobId: str
    status: str  # queued, in_progress, complete, failed
    result: Optional[dict] = None
    error: Optional[str] = None
