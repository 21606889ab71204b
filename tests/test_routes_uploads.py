from lifestory.services.collection import build_series


def put_keys(s3_client):
    return [c.args[2] for c in s3_client.upload_fileobj.call_args_list]


def test_series_thumbnail_upload(client, repo, s3_client, deleted_keys):
    series = repo.create(build_series())

    response = client.post(
        f"/api/series/{series.id}/upload/thumbnail",
        files={"thumbnail": ("cover.PNG", b"png-bytes", "image/png")},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["filename"].startswith("series-thumbnails/")
    assert body["filename"].endswith(".png")
    assert put_keys(s3_client) == [body["filename"]]
    assert repo.load(series.id).thumbnail == body["url"]
    assert deleted_keys() == []


def test_episode_thumbnail_replaces_old_blob(client, repo, store, s3_client, deleted_keys):
    series = build_series()
    series.seasons[0].episodes[0].thumbnail = store.url_for("thumbnails/old.png")
    series = repo.create(series)

    response = client.post(
        f"/api/series/{series.id}/upload/thumbnail/0/0",
        files={"thumbnail": ("new.jpg", b"jpg", "image/jpeg")},
    )

    assert response.status_code == 200
    new_url = response.json()["url"]
    assert deleted_keys() == ["thumbnails/old.png"]
    assert repo.load(series.id).seasons[0].episodes[0].thumbnail == new_url
    s3_client.upload_fileobj.assert_called_once()
    assert s3_client.upload_fileobj.call_args.kwargs["ExtraArgs"] == {
        "ContentType": "image/jpeg"
    }


def test_thumbnail_upload_rejects_wrong_type(client, repo, s3_client):
    series = repo.create(build_series())

    response = client.post(
        f"/api/series/{series.id}/upload/thumbnail",
        files={"thumbnail": ("notes.txt", b"text", "text/plain")},
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Unsupported file type: notes.txt"}
    s3_client.upload_fileobj.assert_not_called()


def test_upload_without_file(client, repo):
    series = repo.create(build_series())
    response = client.post(f"/api/series/{series.id}/upload/music/0/0")
    assert response.status_code == 400
    assert response.json() == {"error": "No file uploaded"}


def test_upload_to_unknown_series(client, s3_client):
    response = client.post(
        "/api/series/missing/upload/thumbnail",
        files={"thumbnail": ("a.png", b"x", "image/png")},
    )
    assert response.status_code == 404
    s3_client.upload_fileobj.assert_not_called()


def test_upload_to_invalid_episode(client, repo, s3_client):
    series = repo.create(build_series())
    response = client.post(
        f"/api/series/{series.id}/upload/thumbnail/0/1",
        files={"thumbnail": ("a.png", b"x", "image/png")},
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid season or episode index"}
    s3_client.upload_fileobj.assert_not_called()


def test_media_upload_keeps_order(client, repo, s3_client):
    series = repo.create(build_series())

    response = client.post(
        f"/api/series/{series.id}/upload/media/0/0",
        files=[
            ("media", ("clip.mp4", b"video", "video/mp4")),
            ("media", ("photo.jpg", b"image", "image/jpeg")),
        ],
    )

    assert response.status_code == 200
    files = response.json()["files"]
    assert [f["originalName"] for f in files] == ["clip.mp4", "photo.jpg"]
    assert [f["type"] for f in files] == ["video", "image"]
    assert put_keys(s3_client) == [f["filename"] for f in files]

    saved = repo.load(series.id).seasons[0].episodes[0].media
    assert [m.id for m in saved] == [f["id"] for f in files]


def test_media_upload_appends(client, repo):
    series = repo.create(build_series())
    url = f"/api/series/{series.id}/upload/media/0/0"

    client.post(url, files={"media": ("a.png", b"a", "image/png")})
    client.post(url, files={"media": ("b.png", b"b", "image/png")})

    saved = repo.load(series.id).seasons[0].episodes[0].media
    assert [m.original_name for m in saved] == ["a.png", "b.png"]


def test_music_upload_replaces_existing(client, repo, store, deleted_keys):
    series = build_series()
    episode = series.seasons[0].episodes[0]
    episode.music = store.url_for("music/old.mp3")
    episode.music_original_name = "old.mp3"
    series = repo.create(series)

    response = client.post(
        f"/api/series/{series.id}/upload/music/0/0",
        files={"music": ("Theme Song.mp3", b"mp3", "audio/mpeg")},
    )

    body = response.json()
    assert body["originalName"] == "Theme Song.mp3"
    assert body["filename"].startswith("music/")
    assert deleted_keys() == ["music/old.mp3"]
    saved = repo.load(series.id).seasons[0].episodes[0]
    assert saved.music == body["url"]
    assert saved.music_original_name == "Theme Song.mp3"


def test_music_upload_rejects_images(client, repo):
    series = repo.create(build_series())
    response = client.post(
        f"/api/series/{series.id}/upload/music/0/0",
        files={"music": ("cover.png", b"png", "image/png")},
    )
    assert response.status_code == 400


def test_storage_failure_on_upload_returns_500(client, repo, s3_client):
    from botocore.exceptions import ClientError
    from fastapi.testclient import TestClient

    from lifestory.main import app

    s3_client.upload_fileobj.side_effect = ClientError(
        {"Error": {"Code": "InternalError", "Message": "down"}}, "PutObject"
    )
    series = repo.create(build_series())

    response = TestClient(app, raise_server_exceptions=False).post(
        f"/api/series/{series.id}/upload/thumbnail",
        files={"thumbnail": ("a.png", b"x", "image/png")},
    )

    assert response.status_code == 500
    assert "Failed to upload" in response.json()["error"]
    assert repo.load(series.id).thumbnail is None
