"""API v1 라우터"""

from typing import Any

from fastapi import APIRouter

from app.core.schemas import APIResponse
from app.domains.ai.router import image_router as ai_image_router
from app.domains.ai.router import router as ai_router
from app.domains.authors.router import router as authors_router
from app.domains.blog.router import category_router, tag_router
from app.domains.blog.router import public_router as blog_public_router
from app.domains.blog.router import router as blog_router
from app.domains.comments.router import router as comments_router
from app.domains.contact.router import public_router as contact_public_router
from app.domains.contact.router import router as contact_router
from app.domains.email.router import router as email_router
from app.domains.gallery.router import public_router as gallery_public_router
from app.domains.gallery.router import router as gallery_router
from app.domains.indexing.router import router as indexing_router
from app.domains.services.router import public_router as services_public_router
from app.domains.services.router import router as services_router
from app.domains.uploads.router import router as uploads_router
from app.domains.views.router import public_router as views_public_router
from app.domains.views.router import router as views_router

api_router = APIRouter()

# 관리자 라우터 등록
admin_router = APIRouter(prefix="/admin")
admin_router.include_router(authors_router, prefix="/authors", tags=["Admin Authors"])
admin_router.include_router(ai_image_router, prefix="/blog", tags=["Admin AI Images"])
admin_router.include_router(blog_router, prefix="/blog", tags=["Admin Blog"])
admin_router.include_router(
    category_router, prefix="/categories", tags=["Admin Categories"]
)
admin_router.include_router(tag_router, prefix="/tags", tags=["Admin Tags"])
admin_router.include_router(
    services_router, prefix="/services", tags=["Admin Services"]
)
admin_router.include_router(
    contact_router, prefix="/contact-submissions", tags=["Admin Contact"]
)
admin_router.include_router(
    comments_router, prefix="/comments", tags=["Admin Comments"]
)
admin_router.include_router(gallery_router, prefix="/gallery", tags=["Admin Gallery"])
admin_router.include_router(uploads_router, prefix="/upload", tags=["Admin Upload"])
admin_router.include_router(
    views_router, prefix="/analytics", tags=["Admin Analytics"]
)
admin_router.include_router(
    indexing_router, prefix="/google-indexing", tags=["Admin Indexing"]
)
api_router.include_router(admin_router)

# 공개 라우터 등록
api_router.include_router(blog_public_router, prefix="/blog", tags=["Blog"])
api_router.include_router(
    services_public_router, prefix="/services", tags=["Services"]
)
api_router.include_router(gallery_public_router, prefix="/gallery", tags=["Gallery"])
api_router.include_router(contact_public_router, prefix="/contact", tags=["Contact"])
api_router.include_router(views_public_router, prefix="/views", tags=["Views"])
api_router.include_router(email_router, prefix="/email", tags=["Email"])
api_router.include_router(ai_router, prefix="/ai", tags=["AI"])


@api_router.get("/", response_model=APIResponse[dict[str, Any]])
async def api_v1_root():
    """API v1 루트 엔드포인트"""
    return APIResponse(
        success=True,
        message="Agency CMS API v1",
        data={
            "version": "1.0.0",
            "docs": "/docs",
        },
    )
