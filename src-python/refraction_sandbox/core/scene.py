"""
Copyright 2026 refraction-sandbox authors and contributors

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

import uuid as uuid_module
from typing import Dict, List, Optional

from .geometry import Vector2
from .scene_objs.base_scene_obj import OpticalObject
from .scene_objs.light_source import LightSource


class Scene:
    """
    Container for the optical objects of the sandbox and the light source.

    Objects are owned by the scene and addressed by integer handles. Handles
    are handed out in increasing order and never reused, so a stale handle
    can only ever fail the lookup, never point at a different object.
    The selection is stored as a handle too.

    Attributes:
        objs (list): Snapshot of the objects in insertion order
        handles (list): Handles in insertion order
        light_source (LightSource or None): The source traced by render_frame
        name (str or None): Optional name for the scene (used in exports)

    Notes:
        - Insertion order only matters for picking (the last added object
          that contains the point wins). Tracing always picks the nearest hit.
        - The tracer reads the scene and never changes it.
    """

    def __init__(self, light_source: Optional[LightSource] = None) -> None:
        """Initialize an empty scene."""
        self._objects: Dict[int, OpticalObject] = {}
        self._next_handle = 0
        self._selected: Optional[int] = None
        self.light_source = light_source
        self.name = None
        self._uuid: str = str(uuid_module.uuid4())

    @property
    def objs(self) -> List[OpticalObject]:
        """Objects in insertion order."""
        return list(self._objects.values())

    @property
    def handles(self) -> List[int]:
        return list(self._objects.keys())

    def __len__(self) -> int:
        return len(self._objects)

    def add_object(self, obj: OpticalObject) -> int:
        """
        Add an object to the scene.

        Args:
            obj: The optical object to add

        Returns:
            The handle of the new object.
        """
        handle = self._next_handle
        self._next_handle += 1
        self._objects[handle] = obj
        return handle

    def remove_object(self, handle: int) -> OpticalObject:
        """
        Remove an object from the scene.

        Clears the selection if the removed object was selected.

        Args:
            handle: Handle returned by add_object

        Returns:
            The removed object.

        Raises:
            KeyError: If the handle is unknown.
        """
        obj = self.get_object(handle)
        del self._objects[handle]
        if self._selected == handle:
            self._selected = None
        return obj

    def get_object(self, handle: int) -> OpticalObject:
        """
        Look up an object by handle.

        Raises:
            KeyError: If the handle is unknown.
        """
        if handle not in self._objects:
            raise KeyError(f"No object with handle {handle} in scene")
        return self._objects[handle]

    def clear(self) -> None:
        """Remove all objects from the scene. The light source is kept."""
        self._objects.clear()
        self._selected = None

    # ==================== Selection ====================

    @property
    def selected_handle(self) -> Optional[int]:
        return self._selected

    @property
    def selected_object(self) -> Optional[OpticalObject]:
        if self._selected is None:
            return None
        return self._objects[self._selected]

    def select(self, handle: Optional[int]) -> None:
        """
        Select an object, or clear the selection with None.

        Raises:
            KeyError: If the handle is unknown.
        """
        if handle is not None:
            self.get_object(handle)
        self._selected = handle

    def pick(self, point: Vector2) -> Optional[int]:
        """
        Find the topmost object under a point.

        Args:
            point: Point in world space

        Returns:
            Handle of the last added object whose hit_test accepts the point,
            or None.
        """
        for handle in reversed(list(self._objects)):
            if self._objects[handle].hit_test(point):
                return handle
        return None

    # ==================== Identification ====================

    @property
    def uuid(self) -> str:
        """Auto-generated unique identifier for this scene."""
        return self._uuid

    def get_display_name(self) -> str:
        """
        Get a display name for the scene.

        Returns:
            The user-defined name if set, otherwise "Scene_" and a short UUID.
        """
        if self.name:
            return self.name
        return f"Scene_{self._uuid[:8]}"

    def __repr__(self) -> str:
        return f"<Scene '{self.get_display_name()}' objects={len(self._objects)}>"
