"""Main orchestration logic for project organization."""

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from ..exceptions import NoActiveProjectError
from ..infrastructure.repositories.base import ItemRepository
from ..models.config import CategoryRule, FolderRule, OrganizerConfig, Subcategory, sort_folders
from ..models.item import CategoryType, ItemKind, ItemSnapshot
from ..models.result import MoveResult, OrganizeResult, Placement, PlacementPlan, PlacementReason
from .classifier import ItemClassifier
from .mapping import CategoryMappings
from .mover import FolderTreeMaterializer
from .paths import PathBuilder, folder_display_names
from .rule_engine import find_matching_exception, matches_render_keywords, resolve_subcategory

logger = logging.getLogger(__name__)

# Folder id and current path of an item that is left where it is
FrozenLocation = Tuple[str, Tuple[str, ...]]


def _label_color(rule: CategoryRule, subcategory: Optional[Subcategory]) -> Optional[int]:
    """Subcategory color, else category color."""
    if subcategory is not None and subcategory.label_color is not None:
        return subcategory.label_color
    return rule.label_color


class PlacementPlanner:
    """Decide a destination for every item without touching the project.

    Per item the steps run in a fixed order: render detection, category
    classification with subcategory or sequence refinement, label color,
    exception override, then resolution against the numbered folder names.
    """

    def __init__(self, config: OrganizerConfig):
        self.config = config
        self.mappings = CategoryMappings.build(config.folders)
        self.display_names = folder_display_names(config.folders)
        self.render_folders = [f for f in sort_folders(config.folders) if f.is_render_folder]
        self._render_ids = set(config.render_item_ids)

    def place(self, item: ItemSnapshot, frozen_at: Optional[FrozenLocation] = None) -> Placement:
        """Compute the placement of one item.

        An item inside a frozen folder keeps its current folder and path.
        """
        if frozen_at is not None:
            folder_id, current_path = frozen_at
            return Placement(
                item_id=item.id,
                item_name=item.name,
                reason=PlacementReason.FROZEN,
                folder_id=folder_id,
                destination_path=current_path,
            )

        folder_id: Optional[str] = None
        subpath: Tuple[str, ...] = ()
        label_color: Optional[int] = None
        reason = PlacementReason.UNMATCHED

        render_folder = self._find_render_folder(item)
        if render_folder is not None:
            folder_id = render_folder.id
            reason = PlacementReason.RENDER
        else:
            folder_id, subpath, label_color, reason = self._classify(item)

        exception = find_matching_exception(item.name, self.config.exceptions)
        if exception is not None:
            folder_id = exception.target_folder_id
            subpath = ()
            reason = PlacementReason.EXCEPTION

        if folder_id is None:
            logger.debug(f"No destination for {item.name}")
            return Placement(item.id, item.name, PlacementReason.UNMATCHED)

        root = self.display_names.get(folder_id)
        if root is None:
            logger.warning(f"Item {item.name} targets unknown folder '{folder_id}', skipping")
            return Placement(item.id, item.name, PlacementReason.UNMATCHED)

        if label_color is None:
            folder = self.config.get_folder(folder_id)
            label_color = folder.label_color if folder else None

        return Placement(
            item_id=item.id,
            item_name=item.name,
            reason=reason,
            folder_id=folder_id,
            destination_path=(root,) + subpath,
            label_color=label_color,
        )

    def plan(self, items: Iterable[ItemSnapshot], frozen: Optional[Dict[str, FrozenLocation]] = None) -> PlacementPlan:
        """Compute placements for every non-container item.

        Args:
            items: Project items
            frozen: Folder id and current path of items left in place, by item id
        """
        frozen = frozen or {}
        placements = [
            self.place(item, frozen_at=frozen.get(item.id))
            for item in items
            if not item.is_container
        ]
        plan = PlacementPlan(placements)
        logger.info(f"Planned {len(plan.resolved)} placements, {plan.skipped_count} skipped")
        return plan

    def _find_render_folder(self, item: ItemSnapshot) -> Optional[FolderRule]:
        if item.kind != ItemKind.COMPOSITION or not self.render_folders:
            return None

        if item.id in self._render_ids:
            return self.render_folders[0]

        for folder in self.render_folders:
            if matches_render_keywords(item.name, folder.render_keywords):
                return folder
        return None

    def _classify(self, item: ItemSnapshot) -> Tuple[Optional[str], Tuple[str, ...], Optional[int], PlacementReason]:
        """Category step; returns folder id, subfolder path, label color and reason."""
        unresolved = (None, (), None, PlacementReason.UNMATCHED)

        footage = self.mappings.select(CategoryType.FOOTAGE, item.name)
        detect_sequences = footage.rule.detect_sequences if footage else False

        classification = ItemClassifier.classify_item(item, detect_sequences=detect_sequences)
        if classification is None:
            return unresolved

        if classification.is_sequence:
            if footage is None:
                return unresolved
            rule = footage.rule
            builder = PathBuilder().category(footage.priority_rank, CategoryType.FOOTAGE)
            subcategory = resolve_subcategory(item.name, rule.subcategories)
            if subcategory is not None:
                builder.subcategory(subcategory)
            elif rule.create_subfolders:
                builder.sequence(item.effective_extension)
            return footage.folder_id, builder.build(), _label_color(rule, subcategory), PlacementReason.SEQUENCE

        entry = self.mappings.select(classification.category, item.name)
        if entry is None:
            return unresolved

        rule = entry.rule
        builder = PathBuilder().category(entry.priority_rank, classification.category)
        subcategory = resolve_subcategory(item.name, rule.subcategories)
        if subcategory is not None:
            builder.subcategory(subcategory)
        elif len(rule.subcategories) >= 2:
            builder.others(len(rule.subcategories))
        elif rule.create_subfolders and item.kind == ItemKind.MEDIA:
            builder.extension(item.effective_extension)

        return entry.folder_id, builder.build(), _label_color(rule, subcategory), PlacementReason.CATEGORY


class ProjectOrganizer:
    """Main orchestrator for organizing one host project."""

    def __init__(self, repository: ItemRepository, config: OrganizerConfig):
        self.repository = repository
        self.config = config
        self.planner = PlacementPlanner(config)
        self.materializer = FolderTreeMaterializer(repository)

    def preview(self, item_ids: Optional[Iterable[str]] = None) -> PlacementPlan:
        """Plan a run without moving anything.

        Raises:
            NoActiveProjectError: If no project is open
        """
        items = self._candidates(self.repository.list_all_items(), item_ids)
        return self.planner.plan(items, self._frozen_locations(items))

    def organize(self, item_ids: Optional[Iterable[str]] = None) -> OrganizeResult:
        """Organize the project, or only the given items.

        Returns:
            The run outcome; failures are reported in it, not raised
        """
        self.materializer.reset()

        try:
            items = self._candidates(self.repository.list_all_items(), item_ids)
        except NoActiveProjectError as e:
            logger.error(f"Cannot organize: {e}")
            return OrganizeResult(success=False, error=str(e))

        if not items:
            logger.error("Cannot organize: the project has no items")
            return OrganizeResult(success=False, error="No items to organize")

        plan = None
        try:
            plan = self.planner.plan(items, self._frozen_locations(items))

            root_names = self._root_folder_names(plan)
            folder_colors: Dict[str, int] = {}
            if self.config.settings.apply_folder_label_color:
                folder_colors = {
                    self.planner.display_names[f.id]: f.label_color
                    for f in self.config.folders
                    if f.label_color is not None
                }
            self.materializer.prepare_root_folders(root_names, folder_colors)
            self.materializer.execute(plan.placements)

            deleted = 0
            if self.config.settings.delete_empty_folders_after_run:
                deleted = self.materializer.delete_empty_folders()

        except Exception as e:
            logger.error(f"Organize run aborted: {e}")
            return OrganizeResult(
                success=False,
                moved_items=self._moved_items(),
                skipped_count=self._skipped_count(plan),
                error=str(e),
                plan=plan,
            )

        result = OrganizeResult(
            success=True,
            moved_items=self._moved_items(),
            skipped_count=self._skipped_count(plan),
            deleted_folders=deleted,
            plan=plan,
        )
        logger.info(f"Organized {result.moved_count} items, {result.skipped_count} skipped")
        return result

    def _root_folder_names(self, plan: PlacementPlan) -> List[str]:
        """Root folders to materialize up front, in display order.

        With cleanup enabled only roots that receive items are created, so a
        repeated run creates no folders.
        """
        targets = plan.counts_by_folder()
        names = []
        for folder in sort_folders(self.config.folders):
            if folder.id in targets or not self.config.settings.delete_empty_folders_after_run:
                names.append(self.planner.display_names[folder.id])
        return names

    def _candidates(self, items: List[ItemSnapshot], item_ids: Optional[Iterable[str]]) -> List[ItemSnapshot]:
        items = [item for item in items if not item.is_container]
        if item_ids is not None:
            wanted = set(item_ids)
            items = [item for item in items if item.id in wanted]
        return items

    def _frozen_locations(self, items: List[ItemSnapshot]) -> Dict[str, FrozenLocation]:
        """Items already inside a folder whose contents are left untouched."""
        frozen_roots = [
            (f.id, self.planner.display_names[f.id])
            for f in sort_folders(self.config.folders)
            if f.skip_organization
        ]
        frozen: Dict[str, FrozenLocation] = {}
        for item in items:
            for folder_id, name in frozen_roots:
                if self.repository.is_item_in_subtree_named(item.id, name):
                    frozen[item.id] = (folder_id, self.repository.item_path(item.id))
                    break
        return frozen

    def _moved_items(self) -> List[MoveResult]:
        moved = []
        for folder in self.config.folders:
            count = self.materializer.moved_counts.get(folder.id, 0)
            if count > 0:
                moved.append(MoveResult(folder_id=folder.id, folder_name=folder.name, count=count))
        return moved

    def _skipped_count(self, plan: Optional[PlacementPlan]) -> int:
        planned = plan.skipped_count if plan else 0
        return planned + self.materializer.skipped
