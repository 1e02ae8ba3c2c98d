# dancey_portal/api/v1/api.py
from fastapi import APIRouter

from dancey_portal.api.v1.endpoints.auth_route import router as auth_router
from dancey_portal.api.v1.endpoints.admin_route import router as admin_router
from dancey_portal.api.v1.endpoints.profile_route import router as profile_router
from dancey_portal.api.v1.endpoints.instructor_route import router as instructor_router
from dancey_portal.api.v1.endpoints.class_route import router as class_router
from dancey_portal.api.v1.endpoints.class_pack_route import router as class_pack_router
from dancey_portal.api.v1.endpoints.membership_route import router as membership_router
from dancey_portal.api.v1.endpoints.promotion_route import router as promotion_router
from dancey_portal.api.v1.endpoints.news_route import router as news_router
from dancey_portal.api.v1.endpoints.rating_route import router as rating_router
from dancey_portal.api.v1.endpoints.checkin_route import router as checkin_router
from dancey_portal.api.v1.endpoints.app_user_route import router as app_user_router
from dancey_portal.api.v1.endpoints.upload_route import router as upload_router

api_router = APIRouter()

api_router.include_router(auth_router, prefix="/auth", tags=["Login"])
api_router.include_router(admin_router, prefix="/admins", tags=["Admins"])
api_router.include_router(profile_router, prefix="/profile", tags=["Profile"])
api_router.include_router(instructor_router, prefix="/instructors", tags=["Instructors"])
api_router.include_router(class_router, prefix="/classes", tags=["Classes"])
api_router.include_router(class_pack_router, prefix="/class-packs", tags=["Class Packs"])
api_router.include_router(membership_router, prefix="/memberships", tags=["Memberships"])
api_router.include_router(promotion_router, prefix="/promotions", tags=["Promotions"])
api_router.include_router(news_router, prefix="/news", tags=["News"])
api_router.include_router(rating_router, prefix="/ratings", tags=["Ratings"])
api_router.include_router(checkin_router, prefix="/check-ins", tags=["Check-ins"])
api_router.include_router(app_user_router, prefix="/app-users", tags=["App Users"])
api_router.include_router(upload_router, prefix="/uploads", tags=["Uploads"])
