"""AI 도메인 공통 타입"""

from enum import Enum


class ContentType(str, Enum):
    """생성할 콘텐츠 유형"""

    BLOG_POST = "blog-post"
    SERVICE_DESCRIPTION = "service-description"
    PAGE_CONTENT = "page-content"
    EMAIL_TEMPLATE = "email-template"
    MARKETING_COPY = "marketing-copy"


class ContentTone(str, Enum):
    """문체"""

    PROFESSIONAL = "professional"
    CASUAL = "casual"
    TECHNICAL = "technical"
    FRIENDLY = "friendly"
    PERSUASIVE = "persuasive"
    AUTHORITATIVE = "authoritative"


class ContentLength(str, Enum):
    """분량"""

    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"


class ImageModel(str, Enum):
    """이미지 생성 모델"""

    DALL_E_3 = "dall-e-3"
    GPT_IMAGE_1 = "gpt-image-1"


class ImageStyle(str, Enum):
    """이미지 스타일"""

    PHOTOGRAPHIC = "photographic"
    ILLUSTRATION = "illustration"
    MINIMALIST = "minimalist"
    ABSTRACT = "abstract"
    TECHNICAL = "technical"
    CORPORATE = "corporate"


# 모델별 허용 크기/품질
IMAGE_SIZES: dict[ImageModel, tuple[str, ...]] = {
    ImageModel.DALL_E_3: ("1024x1024", "1792x1024", "1024x1792"),
    ImageModel.GPT_IMAGE_1: ("1024x1024", "1536x1024", "1024x1536", "auto"),
}

IMAGE_QUALITIES: dict[ImageModel, tuple[str, ...]] = {
    ImageModel.DALL_E_3: ("standard", "hd"),
    ImageModel.GPT_IMAGE_1: ("low", "medium", "high", "auto"),
}
