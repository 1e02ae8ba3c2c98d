from pydantic import BaseModel, Field
from typing import List


class UploadResponse(BaseModel):
    success: bool = True
    url: str
    key: str


class PresignedUrlRequest(BaseModel):
    file_name: str = Field(..., min_length=1, example="intro.mp4")
    file_type: str = Field(..., example="video/mp4")
    file_size: int = Field(..., gt=0, example=10485760)


class PresignedUrlResponse(BaseModel):
    presigned_url: str
    final_url: str
    key: str


class DeleteFilesRequest(BaseModel):
    urls: List[str] = Field(..., min_length=1)


class DeleteFilesResponse(BaseModel):
    success: bool
    deleted_count: int
    failed_count: int
