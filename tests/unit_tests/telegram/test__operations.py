import pytest

from files_gateway.telegram.operations import RemoteOperation, classify_media_type


@pytest.mark.parametrize(
    "media_type",
    ["image/png", "image/jpeg", "image/gif", "IMAGE/PNG", "image/webp; q=0.9"],
)
def test_image_types_are_sent_as_photos(media_type):
    operation = classify_media_type(media_type)
    assert operation is RemoteOperation.SEND_PHOTO
    assert operation.field_name == "photo"
    assert operation.endpoint == "sendPhoto"


@pytest.mark.parametrize("media_type", ["video/mp4", "video/quicktime", "Video/WebM"])
def test_video_types_are_sent_as_videos(media_type):
    operation = classify_media_type(media_type)
    assert operation is RemoteOperation.SEND_VIDEO
    assert operation.field_name == "video"
    assert operation.endpoint == "sendVideo"


@pytest.mark.parametrize(
    "media_type",
    [
        "application/pdf",
        "text/plain",
        "audio/mpeg",
        "application/octet-stream",
        "",
        None,
        "garbage",
        "imagepng",
        "x-image/png",
    ],
)
def test_everything_else_is_sent_as_document(media_type):
    operation = classify_media_type(media_type)
    assert operation is RemoteOperation.SEND_DOCUMENT
    assert operation.field_name == "document"
    assert operation.endpoint == "sendDocument"
