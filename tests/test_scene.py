import pytest

from bezier3d.config import SurfaceSettings
from bezier3d.errors import InvalidArgument
from bezier3d.scene import SurfaceScene
from bezier3d.texture import ImageTexture, TextureSlot


class FakeLoader:
    def __init__(self):
        self.calls = []

    def __call__(self, path):
        self.calls.append(path)
        if not path:
            return TextureSlot.unloaded()
        if path == "broken.png":
            return TextureSlot.failed()
        return TextureSlot.loaded(ImageTexture.solid((0.5, 0.5, 0.5, 1.0)))


def make_scene(**settings):
    return SurfaceScene(SurfaceSettings(**settings), texture_loader=FakeLoader())


def test_default_scene():
    scene = make_scene()
    assert scene.mesh.accuracy == 5
    assert scene.wireframe is None
    assert not scene.shading.use_texture
    assert scene.shading.light_position == (10.0, 10.0, 10.0)


def test_accuracy_change_rebuilds_mesh():
    scene = make_scene()
    first = scene.mesh
    scene.update(kd=0.2)
    assert scene.mesh is first
    assert scene.shading.kd == 0.2
    scene.update(accuracy=8)
    assert scene.mesh is not first
    assert len(scene.mesh.positions) == 81


def test_invalid_update_keeps_previous_state():
    scene = make_scene()
    mesh, settings = scene.mesh, scene.settings
    with pytest.raises(InvalidArgument):
        scene.update(accuracy=0)
    assert scene.mesh is mesh
    assert scene.settings is settings


def test_grid_toggle_builds_and_releases_wireframe():
    scene = make_scene()
    scene.update(show_grid=True)
    assert scene.wireframe is not None
    assert scene.cache.has_wireframe
    scene.update(show_grid=False, accuracy=3)
    assert scene.wireframe is None
    assert not scene.cache.has_wireframe


def test_grid_follows_accuracy():
    scene = make_scene(show_grid=True)
    scene.update(accuracy=2)
    assert scene.wireframe.accuracy == 2
    assert len(scene.wireframe.line_indices) == 40


def test_textures_load_only_when_path_changes():
    scene = make_scene(texture_path="wood.png")
    loader = scene.texture_loader
    assert scene.shading.use_texture
    calls = len(loader.calls)
    scene.update(ks=0.1)
    assert len(loader.calls) == calls
    scene.update(texture_path="broken.png")
    assert not scene.shading.use_texture


def test_texture_arriving_later():
    scene = make_scene()
    scene.set_texture(TextureSlot.loaded(ImageTexture.solid((1.0, 0.0, 0.0, 1.0))))
    assert scene.shading.use_texture
    scene.set_normal_map(TextureSlot.loaded(ImageTexture.solid((0.5, 0.5, 1.0, 1.0))))
    assert not scene.shading.applies_normal_map
    scene.update(use_normal_map=True)
    assert scene.shading.applies_normal_map


def test_frame_drives_light_only_when_animating():
    scene = make_scene()
    state = scene.frame(1.0)
    assert state.mesh_rotation_z == pytest.approx(0.1)
    assert scene.shading.light_position == (10.0, 10.0, 10.0)

    scene.update(animate_light=True)
    scene.frame(0.0)
    assert scene.shading.light_position == (0.0, 5.0, 10.0)


def test_shading_rebuild_keeps_orbiting_light():
    scene = make_scene(animate_light=True)
    scene.frame(0.0)
    scene.update(kd=0.3)
    assert scene.shading.light_position == (0.0, 5.0, 10.0)


def test_snapshot_shape():
    scene = make_scene()
    snap = scene.snapshot()
    assert snap["type"] == "state"
    assert snap["settings"]["accuracy"] == 5
    assert snap["frame"]["light_position"] == [10.0, 10.0, 10.0]
    assert snap["shading"]["uKd"] == 0.8
