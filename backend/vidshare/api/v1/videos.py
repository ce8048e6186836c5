"""Video endpoints: publishing, listing and owner-managed lifecycle."""

from __future__ import annotations

from flask import Blueprint, request

from vidshare.api.deps import (
    api_response,
    current_identity,
    require_auth,
    staged_files,
    timing,
    video_service,
)
from vidshare.schemas import (
    MetaSchema,
    PublishVideoSchema,
    UpdateVideoSchema,
    VideoListQuerySchema,
    VideoSchema,
)
from vidshare.services.videos.dto import PublishVideoIn, VideoListIn, VideoUpdateIn

bp = Blueprint("videos", __name__)

list_query_schema = VideoListQuerySchema()
publish_schema = PublishVideoSchema()
update_schema = UpdateVideoSchema()
video_schema = VideoSchema()
videos_schema = VideoSchema(many=True)
meta_schema = MetaSchema()


@bp.get("")
@require_auth
@timing
def list_videos():
    """List visible videos with ``page``, ``limit``, ``query``, ``sortBy``, ``sortType``, ``userId``."""

    identity = current_identity()
    args = list_query_schema.load(request.args)
    items, meta = video_service(identity.id).list_videos(
        identity.id,
        VideoListIn(
            page=args["page"],
            limit=args["limit"],
            query=args["query"],
            sort_by=args["sort_by"],
            sort_type=args["sort_type"],
            user_id=args["user_id"],
        ),
    )
    data = {"videos": videos_schema.dump(items), "meta": meta_schema.dump(meta)}
    return api_response(data, "Videos fetched successfully")


@bp.post("")
@require_auth
@timing
def publish_video():
    """Publish a video from a multipart form with ``videoFile`` and ``thumbnail``."""

    identity = current_identity()
    data = publish_schema.load(request.form)
    with staged_files("videoFile", "thumbnail") as files:
        video = video_service(identity.id).publish(
            identity.id,
            PublishVideoIn(
                title=data["title"],
                description=data["description"],
                video_path=files["videoFile"],
                thumbnail_path=files["thumbnail"],
            ),
        )
    return api_response(video_schema.dump(video), "Video uploaded successfully", status=201)


@bp.get("/<int:video_id>")
@require_auth
@timing
def get_video(video_id: int):
    identity = current_identity()
    video = video_service(identity.id).get_video(identity.id, video_id)
    return api_response(video_schema.dump(video), "Video fetched successfully")


@bp.patch("/<int:video_id>")
@require_auth
@timing
def update_video(video_id: int):
    identity = current_identity()
    data = update_schema.load(request.form or (request.get_json(silent=True) or {}))
    with staged_files("thumbnail") as files:
        video = video_service(identity.id).update_video(
            identity.id,
            video_id,
            VideoUpdateIn(
                title=data["title"],
                description=data["description"],
                thumbnail_path=files["thumbnail"],
            ),
        )
    return api_response(video_schema.dump(video), "Video updated successfully")


@bp.delete("/<int:video_id>")
@require_auth
@timing
def delete_video(video_id: int):
    identity = current_identity()
    video_service(identity.id).delete_video(identity.id, video_id)
    return api_response({}, "Video deleted successfully")


@bp.patch("/toggle/publish/<int:video_id>")
@require_auth
@timing
def toggle_publish(video_id: int):
    identity = current_identity()
    video = video_service(identity.id).toggle_publish(identity.id, video_id)
    return api_response(video_schema.dump(video), "Publish status toggled")
