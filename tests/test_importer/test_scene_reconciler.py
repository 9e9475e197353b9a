"""Tests for SceneReconciler."""

import pytest

from tac_import.config import Settings
from tac_import.database.models.enums import Layer, ObjectType
from tac_import.database.models.world import WorldObject
from tac_import.importer.scene_reconciler import SceneReconciler
from tac_import.schemas.import_batch import SceneDescriptor
from tac_import.world.defaults import PAGE_DEFAULTS
from tac_import.world.repository import SqlWorldRepository
from tests.factories import RejectingRepository, create_graphic, create_page, create_path


def _scene(**data) -> SceneDescriptor:
    return SceneDescriptor.model_validate({"name": "Cave", **data})


def _walls(count: int) -> list[dict]:
    return [
        {"startX": i * 10, "startY": 0, "endX": i * 10, "endY": 100}
        for i in range(count)
    ]


class TestLocatePage:
    """Tests for finding the page a scene belongs to."""

    def test_missing_page_fails_scene(
        self, repository: SqlWorldRepository, test_settings: Settings
    ):
        reconciler = SceneReconciler(repository, test_settings)

        outcome = reconciler.reconcile(_scene(name="Nowhere"))

        assert not outcome.ok
        assert outcome.detail == "No page found for scene: Nowhere"
        assert repository.find_all(ObjectType.PAGE) == []

    def test_missing_page_created_when_enabled(self, repository: SqlWorldRepository):
        settings = Settings(_env_file=None, create_missing_pages=True)
        reconciler = SceneReconciler(repository, settings)

        outcome = reconciler.reconcile(_scene(name="Nowhere", walls=_walls(1)))

        assert outcome.ok
        pages = repository.find_by_type_and_name(ObjectType.PAGE, "Nowhere")
        assert len(pages) == 1
        assert pages[0].get("width") == 21.94
        assert len(repository.find_children_of_page(ObjectType.PATH, pages[0].id)) == 1

    def test_duplicate_pages_use_first(
        self, repository: SqlWorldRepository, test_settings: Settings
    ):
        first = create_page(repository, "Cave")
        second = create_page(repository, "Cave")
        reconciler = SceneReconciler(repository, test_settings)

        outcome = reconciler.reconcile(_scene(walls=_walls(2)))

        assert outcome.ok
        assert len(repository.find_children_of_page(ObjectType.PATH, first.id)) == 2
        assert repository.find_children_of_page(ObjectType.PATH, second.id) == []


class TestPurgeAndConfigure:
    """Tests for purging and configuring the page."""

    def test_purges_existing_graphics_and_paths(
        self,
        repository: SqlWorldRepository,
        test_settings: Settings,
        cave_page: WorldObject,
    ):
        create_graphic(repository, cave_page, "Old token")
        create_graphic(repository, cave_page, "Old map")
        create_path(repository, cave_page, "Old wall")
        reconciler = SceneReconciler(repository, test_settings)

        outcome = reconciler.reconcile(_scene())

        assert outcome.ok
        assert repository.find_children_of_page(ObjectType.GRAPHIC, cave_page.id) == []
        assert repository.find_children_of_page(ObjectType.PATH, cave_page.id) == []

    def test_does_not_touch_other_pages(
        self,
        repository: SqlWorldRepository,
        test_settings: Settings,
        cave_page: WorldObject,
    ):
        other = create_page(repository, "Other")
        create_graphic(repository, other, "Keep me")
        reconciler = SceneReconciler(repository, test_settings)

        reconciler.reconcile(_scene())

        assert len(repository.find_children_of_page(ObjectType.GRAPHIC, other.id)) == 1

    def test_applies_page_settings_and_size(
        self, repository: SqlWorldRepository, test_settings: Settings
    ):
        page = create_page(repository, "Cave", width=40, height=30, showgrid=False)
        reconciler = SceneReconciler(repository, test_settings)

        reconciler.reconcile(_scene())

        for key, value in PAGE_DEFAULTS.items():
            assert page.get(key) == value
        assert page.get("width") == 21.94
        assert page.get("height") == 21.94


class TestBackground:
    """Tests for background image placement."""

    def test_places_full_canvas_map_graphic(
        self,
        repository: SqlWorldRepository,
        test_settings: Settings,
        cave_page: WorldObject,
    ):
        reconciler = SceneReconciler(repository, test_settings)

        outcome = reconciler.reconcile(_scene(imageUrl="http://img/cave.jpg"))

        assert outcome.ok
        graphics = repository.find_children_of_page(ObjectType.GRAPHIC, cave_page.id)
        assert len(graphics) == 1
        background = graphics[0]
        assert background.get("layer") == Layer.MAP.value
        assert background.get("imgsrc") == "http://img/cave.jpg"
        assert background.get("width") == pytest.approx(1535.8)
        assert background.get("height") == pytest.approx(1535.8)
        assert background.get("left") == pytest.approx(767.9)
        assert background.get("top") == pytest.approx(767.9)

    def test_no_image_no_background(
        self,
        repository: SqlWorldRepository,
        test_settings: Settings,
        cave_page: WorldObject,
    ):
        SceneReconciler(repository, test_settings).reconcile(_scene())

        assert repository.find_children_of_page(ObjectType.GRAPHIC, cave_page.id) == []

    def test_background_failure_is_soft_error(
        self,
        repository: SqlWorldRepository,
        test_settings: Settings,
        cave_page: WorldObject,
    ):
        """A rejected background fails the scene but walls are still placed."""
        rejecting = RejectingRepository(repository, ObjectType.GRAPHIC, every=1)
        reconciler = SceneReconciler(rejecting, test_settings)

        outcome = reconciler.reconcile(_scene(imageUrl="http://img/cave.jpg", walls=_walls(2)))

        assert not outcome.ok
        assert "Failed to place background image" in outcome.detail
        assert len(repository.find_children_of_page(ObjectType.PATH, cave_page.id)) == 2


class TestWalls:
    """Tests for wall placement."""

    def test_wall_endpoints_are_transformed(
        self,
        repository: SqlWorldRepository,
        test_settings: Settings,
        cave_page: WorldObject,
    ):
        reconciler = SceneReconciler(repository, test_settings)

        reconciler.reconcile(
            _scene(walls=[{"startX": 0, "startY": 768, "endX": 1536, "endY": 768}])
        )

        paths = repository.find_children_of_page(ObjectType.PATH, cave_page.id)
        assert len(paths) == 1
        assert paths[0].get("points") == [[0, 768], [1536, 768]]
        assert paths[0].get("layer") == Layer.WALLS.value
        assert paths[0].get("name") == "Cave wall 1"

    def test_every_kth_rejection_counts_shortfall(
        self,
        repository: SqlWorldRepository,
        test_settings: Settings,
        cave_page: WorldObject,
    ):
        """7 walls with every 3rd rejected: 5 created, scene fails with the shortfall."""
        rejecting = RejectingRepository(repository, ObjectType.PATH, every=3)
        reconciler = SceneReconciler(rejecting, test_settings)

        outcome = reconciler.reconcile(_scene(walls=_walls(7)))

        assert not outcome.ok
        assert outcome.detail == "Created 5 of 7 walls"
        assert len(repository.find_children_of_page(ObjectType.PATH, cave_page.id)) == 5

    def test_scene_with_no_walls_succeeds(
        self,
        repository: SqlWorldRepository,
        test_settings: Settings,
        cave_page: WorldObject,
    ):
        outcome = SceneReconciler(repository, test_settings).reconcile(_scene())

        assert outcome.ok
        assert outcome.name == "Cave"


class TestLights:
    """Tests for light marker placement."""

    def test_light_marker_attributes(
        self,
        repository: SqlWorldRepository,
        test_settings: Settings,
        cave_page: WorldObject,
    ):
        reconciler = SceneReconciler(repository, test_settings)

        outcome = reconciler.reconcile(
            _scene(lights=[{"x": 768, "y": 768, "radius": 140, "color": "#ffcc00"}])
        )

        assert outcome.ok
        graphics = repository.find_children_of_page(ObjectType.GRAPHIC, cave_page.id)
        assert len(graphics) == 1
        light = graphics[0]
        assert light.get("layer") == Layer.WALLS.value
        assert light.get("left") == 768
        assert light.get("top") == 768
        assert light.get("aura1_radius") == pytest.approx(10.0)
        assert light.get("aura1_color") == "#ffcc00"
        assert light.get("bright_light_distance") == pytest.approx(5.0)
        assert light.get("low_light_distance") == pytest.approx(10.0)
        assert light.get("emits_bright_light") is True

    def test_light_color_defaults_to_white(
        self,
        repository: SqlWorldRepository,
        test_settings: Settings,
        cave_page: WorldObject,
    ):
        SceneReconciler(repository, test_settings).reconcile(
            _scene(lights=[{"x": 0, "y": 0, "radius": 70}])
        )

        light = repository.find_children_of_page(ObjectType.GRAPHIC, cave_page.id)[0]
        assert light.get("light_color") == "#ffffff"

    def test_light_shortfall_after_background(
        self,
        repository: SqlWorldRepository,
        test_settings: Settings,
        cave_page: WorldObject,
    ):
        """Only the rejected lights count against the scene."""
        rejecting = RejectingRepository(repository, ObjectType.GRAPHIC, every=2)
        reconciler = SceneReconciler(rejecting, test_settings)
        lights = [{"x": 0, "y": 0, "radius": 70} for _ in range(4)]

        outcome = reconciler.reconcile(
            _scene(imageUrl="http://img/cave.jpg", lights=lights)
        )

        # Background is graphic #1 (ok); lights are #2-#5, so #2 and #4 fail
        assert not outcome.ok
        assert outcome.detail == "Created 2 of 4 lights"

    def test_background_and_light_errors_are_joined(
        self,
        repository: SqlWorldRepository,
        test_settings: Settings,
        cave_page: WorldObject,
    ):
        rejecting = RejectingRepository(repository, ObjectType.GRAPHIC, every=1)
        reconciler = SceneReconciler(rejecting, test_settings)

        outcome = reconciler.reconcile(
            _scene(imageUrl="http://img/cave.jpg", lights=[{"x": 0, "y": 0, "radius": 70}])
        )

        assert not outcome.ok
        assert outcome.detail == (
            "Failed to place background image: Failed to create graphic: Cave background; "
            "Created 0 of 1 lights"
        )
