"""create_cms_tables

Revision ID: a1c4e9f27b30
Revises:
Create Date: 2026-10-16 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "a1c4e9f27b30"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id() -> sa.Column:
    return sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False, comment="ID")


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at",
        sa.DateTime(timezone=True),
        server_default=sa.text("now()"),
        nullable=False,
        comment="생성 일시",
    )


def _updated_at() -> sa.Column:
    return sa.Column(
        "updated_at",
        sa.DateTime(timezone=True),
        server_default=sa.text("now()"),
        nullable=True,
        comment="수정 일시",
    )


def _order() -> sa.Column:
    return sa.Column(
        "order", sa.Integer(), server_default="0", nullable=False, comment="정렬 순서"
    )


def _service_fk() -> sa.Column:
    return sa.Column(
        "service_id",
        postgresql.UUID(as_uuid=True),
        sa.ForeignKey("services.id", ondelete="CASCADE"),
        nullable=False,
        comment="서비스 ID",
    )


def upgrade() -> None:
    """업그레이드 마이그레이션"""
    # authors
    op.create_table(
        "authors",
        _id(),
        sa.Column("name", sa.String(length=255), nullable=False, comment="저자 이름"),
        sa.Column(
            "email", sa.String(length=255), nullable=False, comment="저자 이메일 (고유)"
        ),
        sa.Column("bio", sa.Text(), nullable=True, comment="소개"),
        sa.Column("avatar_url", sa.Text(), nullable=True, comment="프로필 이미지 URL"),
        _created_at(),
        _updated_at(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )

    # blog
    op.create_table(
        "categories",
        _id(),
        sa.Column("name", sa.String(length=255), nullable=False, comment="카테고리명"),
        sa.Column("slug", sa.String(length=255), nullable=False, comment="슬러그"),
        sa.Column("description", sa.Text(), nullable=True, comment="설명"),
        _created_at(),
        _updated_at(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )
    op.create_index("ix_categories_slug", "categories", ["slug"], unique=True)

    op.create_table(
        "tags",
        _id(),
        sa.Column("name", sa.String(length=255), nullable=False, comment="태그명"),
        sa.Column("slug", sa.String(length=255), nullable=False, comment="슬러그"),
        _created_at(),
        _updated_at(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_tags_slug", "tags", ["slug"], unique=True)

    op.create_table(
        "blog_posts",
        _id(),
        sa.Column("title", sa.String(length=500), nullable=False, comment="제목"),
        sa.Column("slug", sa.String(length=255), nullable=False, comment="슬러그"),
        sa.Column("excerpt", sa.Text(), nullable=False, comment="요약"),
        sa.Column("content", sa.Text(), nullable=False, comment="본문"),
        sa.Column("featured_image", sa.Text(), nullable=True, comment="대표 이미지 URL"),
        sa.Column(
            "author_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("authors.id"),
            nullable=True,
            comment="저자 ID",
        ),
        sa.Column(
            "category_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("categories.id", ondelete="SET NULL"),
            nullable=True,
            comment="카테고리 ID",
        ),
        sa.Column(
            "status",
            sa.String(length=20),
            server_default="draft",
            nullable=False,
            comment="상태 (draft, published, archived)",
        ),
        sa.Column(
            "published_at", sa.DateTime(timezone=True), nullable=True, comment="발행 일시"
        ),
        sa.Column("meta_title", sa.String(length=255), nullable=True, comment="SEO 제목"),
        sa.Column("meta_description", sa.Text(), nullable=True, comment="SEO 설명"),
        sa.Column("meta_keywords", sa.Text(), nullable=True, comment="SEO 키워드"),
        _created_at(),
        _updated_at(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_blog_posts_slug", "blog_posts", ["slug"], unique=True)
    op.create_index("ix_blog_posts_author_id", "blog_posts", ["author_id"])
    op.create_index("ix_blog_posts_category_id", "blog_posts", ["category_id"])
    op.create_index("ix_blog_posts_status", "blog_posts", ["status"])

    op.create_table(
        "blog_post_tags",
        sa.Column(
            "post_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("blog_posts.id", ondelete="CASCADE"),
            nullable=False,
            comment="게시글 ID",
        ),
        sa.Column(
            "tag_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("tags.id", ondelete="CASCADE"),
            nullable=False,
            comment="태그 ID",
        ),
        sa.PrimaryKeyConstraint("post_id", "tag_id"),
    )

    # services
    op.create_table(
        "services",
        _id(),
        sa.Column("title", sa.String(length=255), nullable=False, comment="제목"),
        sa.Column("slug", sa.String(length=255), nullable=False, comment="슬러그"),
        sa.Column("short_description", sa.Text(), nullable=False, comment="짧은 설명"),
        sa.Column("full_description", sa.Text(), nullable=False, comment="상세 설명"),
        sa.Column("timeline", sa.String(length=100), nullable=False, comment="진행 기간"),
        sa.Column(
            "category",
            sa.String(length=50),
            nullable=False,
            comment="분류 (Development, Design, Consulting, Marketing, Support)",
        ),
        sa.Column(
            "status",
            sa.String(length=20),
            server_default="published",
            nullable=False,
            comment="상태 (draft, published, archived)",
        ),
        sa.Column("featured_image", sa.Text(), nullable=True, comment="대표 이미지 URL"),
        _created_at(),
        _updated_at(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_services_slug", "services", ["slug"], unique=True)
    op.create_index("ix_services_category", "services", ["category"])
    op.create_index("ix_services_status", "services", ["status"])

    for table, column, column_type, comment in (
        ("service_features", "feature", sa.Text(), "기능"),
        ("service_benefits", "benefit", sa.Text(), "혜택"),
        ("service_deliverables", "deliverable", sa.Text(), "결과물"),
        ("service_technologies", "technology", sa.String(length=255), "기술"),
        ("service_gallery_images", "image_url", sa.Text(), "이미지 URL"),
    ):
        op.create_table(
            table,
            _id(),
            _service_fk(),
            sa.Column(column, column_type, nullable=False, comment=comment),
            _order(),
            _created_at(),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index(f"ix_{table}_service_id", table, ["service_id"])

    op.create_table(
        "service_process_steps",
        _id(),
        _service_fk(),
        sa.Column("step", sa.Integer(), nullable=False, comment="단계 번호"),
        sa.Column("title", sa.String(length=255), nullable=False, comment="제목"),
        sa.Column("description", sa.Text(), nullable=False, comment="설명"),
        sa.Column("duration", sa.String(length=100), nullable=True, comment="소요 기간"),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_service_process_steps_service_id", "service_process_steps", ["service_id"]
    )

    op.create_table(
        "service_pricing_tiers",
        _id(),
        _service_fk(),
        sa.Column("name", sa.String(length=255), nullable=False, comment="플랜명"),
        sa.Column("price", sa.String(length=100), nullable=False, comment="가격"),
        sa.Column("description", sa.Text(), nullable=False, comment="설명"),
        sa.Column(
            "popular",
            sa.Boolean(),
            server_default="false",
            nullable=False,
            comment="추천 플랜 여부",
        ),
        _order(),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_service_pricing_tiers_service_id", "service_pricing_tiers", ["service_id"]
    )

    op.create_table(
        "service_pricing_features",
        _id(),
        sa.Column(
            "pricing_tier_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("service_pricing_tiers.id", ondelete="CASCADE"),
            nullable=False,
            comment="가격 플랜 ID",
        ),
        sa.Column("feature", sa.Text(), nullable=False, comment="항목"),
        _order(),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_service_pricing_features_pricing_tier_id",
        "service_pricing_features",
        ["pricing_tier_id"],
    )

    op.create_table(
        "service_faqs",
        _id(),
        _service_fk(),
        sa.Column("question", sa.Text(), nullable=False, comment="질문"),
        sa.Column("answer", sa.Text(), nullable=False, comment="답변"),
        _order(),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_service_faqs_service_id", "service_faqs", ["service_id"])

    op.create_table(
        "service_testimonials",
        _id(),
        _service_fk(),
        sa.Column("quote", sa.Text(), nullable=False, comment="후기"),
        sa.Column("author", sa.String(length=255), nullable=False, comment="작성자"),
        sa.Column("company", sa.String(length=255), nullable=False, comment="회사"),
        sa.Column("avatar", sa.Text(), nullable=True, comment="프로필 이미지 URL"),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_service_testimonials_service_id", "service_testimonials", ["service_id"]
    )

    op.create_table(
        "service_related",
        sa.Column(
            "service_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("services.id", ondelete="CASCADE"),
            nullable=False,
            comment="서비스 ID",
        ),
        sa.Column(
            "related_service_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("services.id", ondelete="CASCADE"),
            nullable=False,
            comment="연관 서비스 ID",
        ),
        _created_at(),
        sa.PrimaryKeyConstraint("service_id", "related_service_id"),
    )

    # contact
    op.create_table(
        "contact_submissions",
        _id(),
        sa.Column("name", sa.String(length=255), nullable=False, comment="이름"),
        sa.Column("email", sa.String(length=255), nullable=False, comment="이메일"),
        sa.Column("company", sa.String(length=255), nullable=True, comment="회사"),
        sa.Column("phone", sa.String(length=50), nullable=True, comment="전화번호"),
        sa.Column("subject", sa.String(length=255), nullable=False, comment="제목"),
        sa.Column("message", sa.Text(), nullable=False, comment="내용"),
        sa.Column(
            "project_type", sa.String(length=50), nullable=True, comment="프로젝트 유형"
        ),
        sa.Column("budget", sa.String(length=50), nullable=True, comment="예산 범위"),
        sa.Column("timeline", sa.String(length=50), nullable=True, comment="희망 일정"),
        sa.Column(
            "status",
            sa.String(length=20),
            server_default="new",
            nullable=False,
            comment="처리 상태 (new, read, responded)",
        ),
        sa.Column("ip_address", sa.String(length=45), nullable=True, comment="접수 IP"),
        sa.Column("user_agent", sa.Text(), nullable=True, comment="User-Agent"),
        _created_at(),
        _updated_at(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_contact_submissions_status", "contact_submissions", ["status"]
    )
    op.create_index(
        "idx_contact_submissions_created_at", "contact_submissions", ["created_at"]
    )

    # comments
    op.create_table(
        "admin_comments",
        _id(),
        sa.Column(
            "entity_type",
            sa.String(length=30),
            nullable=False,
            comment="대상 유형 (contact_submission, blog_post, service, gallery_image)",
        ),
        sa.Column(
            "entity_id", postgresql.UUID(as_uuid=True), nullable=False, comment="대상 ID"
        ),
        sa.Column("content", sa.Text(), nullable=False, comment="내용"),
        sa.Column("author_name", sa.String(length=255), nullable=False, comment="작성자"),
        sa.Column(
            "is_internal",
            sa.Boolean(),
            server_default="true",
            nullable=False,
            comment="내부 메모 여부",
        ),
        sa.Column(
            "is_pinned",
            sa.Boolean(),
            server_default="false",
            nullable=False,
            comment="고정 여부",
        ),
        sa.Column(
            "deleted_at",
            sa.DateTime(timezone=True),
            nullable=True,
            comment="삭제 일시 (Soft Delete)",
        ),
        _created_at(),
        _updated_at(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_admin_comments_entity", "admin_comments", ["entity_type", "entity_id"]
    )

    # gallery
    op.create_table(
        "gallery_images",
        _id(),
        sa.Column("name", sa.String(length=255), nullable=False, comment="이름"),
        sa.Column("alt_text", sa.String(length=500), nullable=False, comment="대체 텍스트"),
        sa.Column("description", sa.Text(), nullable=True, comment="설명"),
        sa.Column("file_name", sa.String(length=500), nullable=False, comment="원본 파일명"),
        sa.Column("original_url", sa.String(length=1000), nullable=False, comment="원본 URL"),
        sa.Column(
            "thumbnail_url", sa.String(length=1000), nullable=True, comment="썸네일 URL"
        ),
        sa.Column(
            "optimized_url",
            sa.String(length=1000),
            nullable=True,
            comment="최적화 이미지 URL",
        ),
        sa.Column("file_size", sa.Integer(), nullable=False, comment="파일 크기 (bytes)"),
        sa.Column("width", sa.Integer(), nullable=True),
        sa.Column("height", sa.Integer(), nullable=True),
        sa.Column("mime_type", sa.String(length=100), nullable=False, comment="MIME 타입"),
        sa.Column(
            "display_order",
            sa.Integer(),
            server_default="0",
            nullable=False,
            comment="정렬 순서",
        ),
        sa.Column(
            "is_available",
            sa.Boolean(),
            server_default="true",
            nullable=False,
            comment="공개 여부",
        ),
        sa.Column(
            "is_featured",
            sa.Boolean(),
            server_default="false",
            nullable=False,
            comment="추천 여부",
        ),
        sa.Column(
            "image_metadata",
            postgresql.JSONB(astext_type=sa.Text()),
            nullable=True,
            comment="업로드 메타데이터",
        ),
        _created_at(),
        _updated_at(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_gallery_images_is_available", "gallery_images", ["is_available"]
    )
    op.create_index("idx_gallery_images_is_featured", "gallery_images", ["is_featured"])
    op.create_index(
        "idx_gallery_images_display_order", "gallery_images", ["display_order"]
    )

    op.create_table(
        "gallery_groups",
        _id(),
        sa.Column("name", sa.String(length=255), nullable=False, comment="이름"),
        sa.Column("slug", sa.String(length=255), nullable=False, comment="슬러그"),
        sa.Column("description", sa.Text(), nullable=True, comment="설명"),
        sa.Column(
            "cover_image_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("gallery_images.id", ondelete="SET NULL"),
            nullable=True,
            comment="커버 이미지 ID",
        ),
        sa.Column(
            "display_order",
            sa.Integer(),
            server_default="0",
            nullable=False,
            comment="정렬 순서",
        ),
        sa.Column(
            "is_active",
            sa.Boolean(),
            server_default="true",
            nullable=False,
            comment="활성 여부",
        ),
        _created_at(),
        _updated_at(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_gallery_groups_slug", "gallery_groups", ["slug"], unique=True)

    op.create_table(
        "gallery_image_groups",
        sa.Column(
            "image_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("gallery_images.id", ondelete="CASCADE"),
            nullable=False,
            comment="이미지 ID",
        ),
        sa.Column(
            "group_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("gallery_groups.id", ondelete="CASCADE"),
            nullable=False,
            comment="그룹 ID",
        ),
        sa.Column(
            "display_order",
            sa.Integer(),
            server_default="0",
            nullable=False,
            comment="그룹 내 순서",
        ),
        sa.PrimaryKeyConstraint("image_id", "group_id"),
    )

    # views
    op.create_table(
        "view_tracking",
        _id(),
        sa.Column(
            "content_type",
            sa.String(length=20),
            nullable=False,
            comment="콘텐츠 유형 (blog_post, service)",
        ),
        sa.Column(
            "content_id", postgresql.UUID(as_uuid=True), nullable=False, comment="콘텐츠 ID"
        ),
        sa.Column("ip_address", sa.String(length=45), nullable=True, comment="방문자 IP"),
        sa.Column("user_agent", sa.String(length=1000), nullable=True, comment="User-Agent"),
        sa.Column("referer", sa.String(length=500), nullable=True, comment="Referer"),
        sa.Column(
            "viewed_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
            comment="조회 일시",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_view_tracking_content", "view_tracking", ["content_type", "content_id"]
    )
    op.create_index("idx_view_tracking_viewed_at", "view_tracking", ["viewed_at"])


def downgrade() -> None:
    """다운그레이드 마이그레이션"""
    for table in (
        "view_tracking",
        "gallery_image_groups",
        "gallery_groups",
        "gallery_images",
        "admin_comments",
        "contact_submissions",
        "service_related",
        "service_testimonials",
        "service_faqs",
        "service_pricing_features",
        "service_pricing_tiers",
        "service_process_steps",
        "service_gallery_images",
        "service_technologies",
        "service_deliverables",
        "service_benefits",
        "service_features",
        "services",
        "blog_post_tags",
        "blog_posts",
        "tags",
        "categories",
        "authors",
    ):
        op.drop_table(table)
