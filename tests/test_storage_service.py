# tests/test_storage_service.py
import pytest
from PIL import Image

from storyboardcreator.core.config import StoryboardConfig
from storyboardcreator.core.errors import StoryboardFormatError
from storyboardcreator.services.storage_service import StoryboardService


@pytest.fixture
def service(tmp_path):
    return StoryboardService(config=StoryboardConfig(temp_root=tmp_path / "staging"))


def test_service_full_workflow(service, tmp_path):
    """create -> add shots -> save -> close -> open -> thumbnail"""
    src = tmp_path / "frame.png"
    Image.new("RGB", (1024, 768), color="green").save(src)

    sb = service.new_project(title="Demo", author="Me")
    assert sb.staging_path.parent == service.temp_root
    assert service.add_shot(sb, title="one", body="first", image_path=src) == 0
    assert service.add_shot(sb, 0, title="zero") == 0
    saved = service.save_project(sb, tmp_path / "demo.sb")
    service.close_project(sb)
    assert not service.temp_root.exists()

    opened = service.open_project(str(saved))
    assert [s.title for s in opened.shots] == ["zero", "one"]
    thumb = service.make_thumbnail(opened, 1, size=(100, 100))
    assert thumb.mode == "RGB"
    assert max(thumb.size) == 100
    assert service.make_thumbnail(opened, 0) is None
    # thumbnails are not written into the project
    assert opened.image_cache.list_images() == ["0.png"]
    service.close_project(opened)


def test_attach_image_returns_cached_name(service, tmp_path):
    src = tmp_path / "still.jpg"
    Image.new("RGB", (10, 10), color="blue").save(src)
    sb = service.new_project()
    service.add_shot(sb)
    assert service.attach_image(sb, 0, src) == "0.jpg"
    service.close_project(sb)


def test_thumbnail_of_non_image_is_format_error(service, tmp_path):
    src = tmp_path / "notes.png"
    src.write_text("not really a picture", encoding="utf-8")
    sb = service.new_project()
    service.add_shot(sb, image_path=src)
    with pytest.raises(StoryboardFormatError):
        service.make_thumbnail(sb, 0)
    service.close_project(sb)


def test_config_from_env(tmp_path):
    env = {
        "STORYBOARD_TEMP_ROOT": str(tmp_path / "from-env"),
        "STORYBOARD_STRICT_ID_SCAN": "yes",
    }
    cfg = StoryboardConfig.from_env(env)
    assert cfg.temp_root == tmp_path / "from-env"
    assert cfg.strict_id_scan is True
    assert cfg.metadata_filename == "core.json"
    assert cfg.compression is True
    assert cfg.to_dict()["compression"] is True
    assert StoryboardConfig.from_dict(cfg.to_dict()) == cfg

    default = StoryboardConfig.from_env({})
    assert default.temp_root.name == "StoryboardCreator"
    assert default.strict_id_scan is False
