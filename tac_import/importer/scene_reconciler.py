"""Scene reconciliation: replace everything on a page with an imported scene.

Scenes are fully replaced, never merged. For each scene the reconciler:
1. Locates the page by name (missing page fails the scene)
2. Purges every graphic and path on it
3. Applies the fixed page settings and size
4. Places the background image on the map layer
5. Creates walls on the walls layer
6. Creates light markers on the walls layer
7. Reports one outcome: success, or failure with the collected soft errors

Steps 4-6 collect soft errors instead of stopping, so one bad wall still
leaves the rest of the scene in place.
"""

import logging
from dataclasses import dataclass, field

from tac_import.config import Settings, get_settings
from tac_import.database.models.enums import ObjectType
from tac_import.importer.exceptions import EntityCreationError, PageNotFoundError
from tac_import.importer.results import ItemOutcome
from tac_import.importer.upsert import EntityUpserter
from tac_import.schemas.import_batch import LightSource, SceneDescriptor, WallSegment
from tac_import.world.defaults import BACKGROUND_DEFAULTS, LIGHT_DEFAULTS, PAGE_DEFAULTS
from tac_import.world.repository import WorldEntity, WorldRepository
from tac_import.world.transform import CanvasTransform

logger = logging.getLogger(__name__)


@dataclass
class SceneStats:
    """What happened to one scene's page, for diagnostics."""

    graphics_removed: int = 0
    paths_removed: int = 0
    background_placed: bool = False
    walls_requested: int = 0
    walls_created: int = 0
    lights_requested: int = 0
    lights_created: int = 0
    soft_errors: list[str] = field(default_factory=list)


class SceneReconciler:
    """Reconciles scene descriptors against existing pages."""

    def __init__(
        self,
        repository: WorldRepository,
        settings: Settings | None = None,
    ) -> None:
        self.repository = repository
        self.upserter = EntityUpserter(repository)
        self.settings = settings or get_settings()

    def reconcile(self, scene: SceneDescriptor) -> ItemOutcome:
        """Reconcile one scene. Never raises for per-scene failures.

        Args:
            scene: Validated scene descriptor.

        Returns:
            One success, or one failure with the error detail.
        """
        logger.info(f"Importing scene: {scene.name}")
        try:
            stats = self._reconcile(scene)
        except (PageNotFoundError, EntityCreationError) as e:
            logger.error(f"ROLL20 ERROR: Failed to configure scene: {scene.name}. Error: {e}")
            return ItemOutcome.failure(scene.name, str(e))

        if stats.soft_errors:
            detail = "; ".join(stats.soft_errors)
            logger.warning(f"Scene {scene.name} configured with errors: {detail}")
            return ItemOutcome.failure(scene.name, detail)

        logger.info(
            f"Scene configured: {scene.name} "
            f"({stats.walls_created} walls, {stats.lights_created} lights)"
        )
        return ItemOutcome.success(scene.name)

    def _reconcile(self, scene: SceneDescriptor) -> SceneStats:
        stats = SceneStats()

        page = self._locate_page(scene.name)
        stats.graphics_removed, stats.paths_removed = self._purge_children(page)
        logger.info(
            f"Purged page {scene.name}: {stats.graphics_removed} graphics, "
            f"{stats.paths_removed} paths"
        )
        self._configure_page(page)

        # Page size is read back after configuring, never assumed
        transform = CanvasTransform(
            source_canvas_size=self.settings.source_canvas_size,
            dest_cell_px=self.settings.dest_cell_px,
            page_width=float(page.get("width")),
            page_height=float(page.get("height")),
            px_per_foot=self.settings.px_per_foot,
        )

        if scene.image_url:
            try:
                self._place_background(page, scene)
                stats.background_placed = True
            except EntityCreationError as e:
                logger.warning(f"ROLL20 ERROR: Background for {scene.name}: {e}")
                stats.soft_errors.append(f"Failed to place background image: {e}")

        stats.walls_requested = len(scene.walls)
        for index, wall in enumerate(scene.walls):
            try:
                self._place_wall(page, transform, scene.name, index, wall)
                stats.walls_created += 1
            except EntityCreationError as e:
                logger.warning(f"ROLL20 ERROR: Wall {index} on {scene.name}: {e}")
        if stats.walls_created < stats.walls_requested:
            stats.soft_errors.append(
                f"Created {stats.walls_created} of {stats.walls_requested} walls"
            )

        stats.lights_requested = len(scene.lights)
        for index, light in enumerate(scene.lights):
            try:
                self._place_light(page, transform, scene.name, index, light)
                stats.lights_created += 1
            except EntityCreationError as e:
                logger.warning(f"ROLL20 ERROR: Light {index} on {scene.name}: {e}")
        if stats.lights_created < stats.lights_requested:
            stats.soft_errors.append(
                f"Created {stats.lights_created} of {stats.lights_requested} lights"
            )

        return stats

    def _locate_page(self, name: str) -> WorldEntity:
        pages = self.repository.find_by_type_and_name(ObjectType.PAGE, name)
        if not pages:
            if not self.settings.create_missing_pages:
                raise PageNotFoundError(name)
            logger.info(f"No page named {name}, creating one")
            return self.upserter.create_page(name)
        if len(pages) > 1:
            logger.warning(f"Found {len(pages)} pages named {name}, using the first")
        return pages[0]

    def _purge_children(self, page: WorldEntity) -> tuple[int, int]:
        graphics = self.repository.find_children_of_page(ObjectType.GRAPHIC, page.id)
        paths = self.repository.find_children_of_page(ObjectType.PATH, page.id)
        for obj in [*graphics, *paths]:
            obj.remove()
        return len(graphics), len(paths)

    def _configure_page(self, page: WorldEntity) -> None:
        size = self.settings.page_size_units
        page.set({**PAGE_DEFAULTS, "width": size, "height": size})

    def _place_background(self, page: WorldEntity, scene: SceneDescriptor) -> WorldEntity:
        cell = self.settings.dest_cell_px
        width_px = float(page.get("width")) * cell
        height_px = float(page.get("height")) * cell
        return self.upserter.create_graphic(
            page,
            **BACKGROUND_DEFAULTS,
            name=f"{scene.name} background",
            imgsrc=scene.image_url,
            left=width_px / 2,
            top=height_px / 2,
            width=width_px,
            height=height_px,
        )

    def _place_wall(
        self,
        page: WorldEntity,
        transform: CanvasTransform,
        scene_name: str,
        index: int,
        wall: WallSegment,
    ) -> WorldEntity:
        start = transform.point(wall.start_x, wall.start_y)
        end = transform.point(wall.end_x, wall.end_y)
        return self.upserter.create_barrier(page, start, end, name=f"{scene_name} wall {index + 1}")

    def _place_light(
        self,
        page: WorldEntity,
        transform: CanvasTransform,
        scene_name: str,
        index: int,
        light: LightSource,
    ) -> WorldEntity:
        left, top = transform.point(light.x, light.y)
        radius = transform.radius(light.radius)
        return self.upserter.create_graphic(
            page,
            **LIGHT_DEFAULTS,
            name=f"{scene_name} light {index + 1}",
            left=left,
            top=top,
            aura1_radius=radius,
            aura1_color=light.color,
            light_color=light.color,
            bright_light_distance=radius / 2,
            low_light_distance=radius,
        )
