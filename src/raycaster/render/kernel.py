"""Taichi renderer: one parallel kernel over all pixels.

Every pixel's unproject -> cast -> shade sequence depends only on the pixel
coordinate and an immutable snapshot of the scene, so the outermost loop of
the render kernel runs pixels in parallel and each iteration writes only its
own cell of the output field. No locking is needed.

The scene is snapshotted into Taichi fields when the Renderer is built:
- spheres: centers and radii
- planes: point, unit normal, local X/Y axes and half extents (negative
  half extent means unbounded)
- the shading light position
- one 4x4 matrix combining the inverse projection and the view-to-world
  transform, so NDC points unproject straight into world space

The intersection functions below mirror raycaster.geometry exactly, in
single precision.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.gpu)
    >>> from raycaster.render.kernel import Renderer
    >>> from raycaster.scene.demo import create_demo_scene
    >>> scene, context = create_demo_scene()
    >>> Renderer(context, scene).render()
    >>> context.save("demo.png")
"""

import logging
import time
from typing import Optional

import numpy as np
import taichi as ti
import taichi.math as tm

from raycaster.camera.context import GraphicsContext
from raycaster.geometry.plane import PARALLEL_EPSILON, Plane
from raycaster.geometry.sphere import Sphere
from raycaster.preview.buffer import Color
from raycaster.render.reference import BACKGROUND_COLOR
from raycaster.scene.scene import MAX_INTENSITY, HitSelection, Scene

# Type aliases for vectors using Taichi's math module
vec2 = tm.vec2
vec3 = tm.vec3
vec4 = tm.vec4
ivec3 = tm.ivec3


@ti.dataclass
class KernelHit:
    """Ray-primitive intersection result inside a kernel.

    Attributes:
        hit: 1 if the ray hit the primitive, 0 otherwise.
        near: Entry point. Only valid if hit == 1.
        far: Exit point (equal to near for planes). Only valid if hit == 1.
        normal: Unit outward normal at near. Only valid if hit == 1.
    """

    hit: ti.i32
    near: vec3
    far: vec3
    normal: vec3


# =============================================================================
# Primitive Intersection (Taichi-compatible)
# =============================================================================


@ti.func
def hit_sphere(origin: vec3, direction: vec3, center: vec3, radius: ti.f32) -> KernelHit:
    """Geometric ray-sphere intersection, see raycaster.geometry.sphere."""
    d = tm.normalize(direction)
    oc = center - origin
    t_ca = tm.dot(oc, d)

    did_hit = 0
    near = vec3(0.0, 0.0, 0.0)
    far = vec3(0.0, 0.0, 0.0)
    normal = vec3(0.0, 0.0, 0.0)

    if t_ca >= 0.0:
        d2 = ti.max(tm.dot(oc, oc) - t_ca * t_ca, 0.0)
        r2 = radius * radius
        if d2 <= r2:
            t_hc = ti.sqrt(r2 - d2)
            near = origin + d * (t_ca - t_hc)
            far = origin + d * (t_ca + t_hc)
            normal = tm.normalize(near - center)
            did_hit = 1

    return KernelHit(hit=did_hit, near=near, far=far, normal=normal)


@ti.func
def hit_plane(
    origin: vec3,
    direction: vec3,
    point: vec3,
    normal: vec3,
    x_axis: vec3,
    y_axis: vec3,
    half_extent: vec2,
) -> KernelHit:
    """One-sided ray-plane intersection, see raycaster.geometry.plane.

    A negative half_extent[0] marks an unbounded plane.
    """
    d = tm.normalize(direction)
    denom = tm.dot(d, -normal)

    did_hit = 0
    hit_point = vec3(0.0, 0.0, 0.0)

    if denom >= PARALLEL_EPSILON:
        t = tm.dot(point - origin, -normal) / denom
        if t >= 0.0:
            hit_point = origin + d * t
            inside = 1
            if half_extent[0] >= 0.0:
                offset = hit_point - point
                if ti.abs(tm.dot(offset, x_axis)) > half_extent[0]:
                    inside = 0
                if ti.abs(tm.dot(offset, y_axis)) > half_extent[1]:
                    inside = 0
            did_hit = inside

    return KernelHit(hit=did_hit, near=hit_point, far=hit_point, normal=normal)


# =============================================================================
# Renderer
# =============================================================================


@ti.data_oriented
class Renderer:
    """Parallel Taichi renderer bound to one context and one scene snapshot.

    Attributes:
        context: The graphics context rendered into.
        width: Image width in pixels.
        height: Image height in pixels.
    """

    def __init__(
        self,
        context: GraphicsContext,
        scene: Scene,
        *,
        light_name: Optional[str] = None,
        background: Color = BACKGROUND_COLOR,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        """Snapshot ``scene`` into Taichi fields.

        Taichi must already be initialized (ti.init).

        Raises:
            TypeError: If the scene holds a shape other than Sphere or Plane.
            KeyError: If ``light_name`` is given but not in the scene.
        """
        self._logger = logger if logger is not None else logging.getLogger(__name__)
        self.context = context
        self.width = context.width
        self.height = context.height
        self._half_width = context.width / 2.0
        self._half_height = context.height / 2.0

        spheres: list[Sphere] = []
        planes: list[Plane] = []
        for name, shape in scene.shapes.items():
            if isinstance(shape, Sphere):
                spheres.append(shape)
            elif isinstance(shape, Plane):
                planes.append(shape)
            else:
                raise TypeError(
                    f"Shape {name!r} ({type(shape).__name__}) is not supported by "
                    "the Taichi renderer; use render_reference instead"
                )
        light = scene.resolve_light(light_name)

        self._pixels = ti.Vector.field(3, dtype=ti.i32, shape=(self.width, self.height))
        self._unproject = ti.Matrix.field(4, 4, dtype=ti.f32, shape=())

        # Fields need at least one slot; the counts below guard the loops
        n_spheres = max(len(spheres), 1)
        self._sphere_centers = ti.Vector.field(3, dtype=ti.f32, shape=n_spheres)
        self._sphere_radii = ti.field(dtype=ti.f32, shape=n_spheres)
        self._num_spheres = ti.field(dtype=ti.i32, shape=())

        n_planes = max(len(planes), 1)
        self._plane_points = ti.Vector.field(3, dtype=ti.f32, shape=n_planes)
        self._plane_normals = ti.Vector.field(3, dtype=ti.f32, shape=n_planes)
        self._plane_x_axes = ti.Vector.field(3, dtype=ti.f32, shape=n_planes)
        self._plane_y_axes = ti.Vector.field(3, dtype=ti.f32, shape=n_planes)
        self._plane_half_extents = ti.Vector.field(2, dtype=ti.f32, shape=n_planes)
        self._num_planes = ti.field(dtype=ti.i32, shape=())

        self._light_position = ti.Vector.field(3, dtype=ti.f32, shape=())
        self._has_light = ti.field(dtype=ti.i32, shape=())
        self._background = ti.Vector.field(3, dtype=ti.i32, shape=())
        self._select_farthest = ti.field(dtype=ti.i32, shape=())

        self._upload_camera(context)
        self._upload_spheres(spheres)
        self._upload_planes(planes)

        if light is None:
            self._has_light[None] = 0
            self._logger.warning("Scene has no lights; hits will render black")
        else:
            self._has_light[None] = 1
            self._light_position[None] = [float(c) for c in light.position]
        self._background[None] = [int(c) for c in background]
        self._select_farthest[None] = int(scene.selection is HitSelection.FARTHEST_NEAR)

    # -------------------------------------------------------------------------
    # Scene upload (Python scope)
    # -------------------------------------------------------------------------

    def _upload_camera(self, context: GraphicsContext) -> None:
        unproject = context.view_to_world.to_homogeneous() @ context.projection.inverse_matrix()
        self._unproject[None] = ti.Matrix(unproject.astype(np.float32).tolist())

    def _upload_spheres(self, spheres: list[Sphere]) -> None:
        for idx, sphere in enumerate(spheres):
            self._sphere_centers[idx] = [float(c) for c in sphere.center]
            self._sphere_radii[idx] = sphere.radius
        self._num_spheres[None] = len(spheres)

    def _upload_planes(self, planes: list[Plane]) -> None:
        for idx, plane in enumerate(planes):
            self._plane_points[idx] = [float(c) for c in plane.point]
            self._plane_normals[idx] = [float(c) for c in plane.normal]
            self._plane_x_axes[idx] = [float(c) for c in plane.pose.x_axis()]
            self._plane_y_axes[idx] = [float(c) for c in plane.pose.y_axis()]
            if plane.is_bounded:
                self._plane_half_extents[idx] = [plane.x_dim / 2.0, plane.y_dim / 2.0]
            else:
                self._plane_half_extents[idx] = [-1.0, -1.0]
        self._num_planes[None] = len(planes)

    # -------------------------------------------------------------------------
    # Per-pixel work (Taichi scope)
    # -------------------------------------------------------------------------

    @ti.func
    def _pixel_ray(self, i, j):
        nx = (ti.cast(i, ti.f32) - self._half_width) / self._half_width
        ny = (ti.cast(j, ti.f32) - self._half_height) / self._half_height
        m = self._unproject[None]
        near_h = m @ vec4(nx, ny, -1.0, 1.0)
        far_h = m @ vec4(nx, ny, 1.0, 1.0)
        near = vec3(near_h[0], near_h[1], near_h[2]) / near_h[3]
        far = vec3(far_h[0], far_h[1], far_h[2]) / far_h[3]
        return near, tm.normalize(far - near)

    @ti.func
    def _prefers(self, distance, best):
        better = distance < best
        if self._select_farthest[None] == 1:
            better = distance > best
        return better

    @ti.func
    def _shade(self, near, normal):
        value = 0
        if self._has_light[None] == 1:
            to_light = tm.normalize(self._light_position[None] - near)
            n_dot_l = tm.dot(normal, to_light)
            value = ti.cast(tm.clamp(n_dot_l * MAX_INTENSITY, 0.0, MAX_INTENSITY), ti.i32)
        return ivec3(value, value, value)

    @ti.func
    def _trace(self, i, j):
        origin, direction = self._pixel_ray(i, j)

        found = 0
        best_dist = 0.0
        best_near = vec3(0.0, 0.0, 0.0)
        best_normal = vec3(0.0, 0.0, 0.0)

        for s in range(self._num_spheres[None]):
            rec = hit_sphere(origin, direction, self._sphere_centers[s], self._sphere_radii[s])
            if rec.hit == 1:
                dist = tm.length(rec.near - origin)
                if found == 0 or self._prefers(dist, best_dist):
                    found = 1
                    best_dist = dist
                    best_near = rec.near
                    best_normal = rec.normal

        for p in range(self._num_planes[None]):
            rec = hit_plane(
                origin,
                direction,
                self._plane_points[p],
                self._plane_normals[p],
                self._plane_x_axes[p],
                self._plane_y_axes[p],
                self._plane_half_extents[p],
            )
            if rec.hit == 1:
                dist = tm.length(rec.near - origin)
                if found == 0 or self._prefers(dist, best_dist):
                    found = 1
                    best_dist = dist
                    best_near = rec.near
                    best_normal = rec.normal

        color = self._background[None]
        if found == 1:
            color = self._shade(best_near, best_normal)
        return color

    @ti.kernel
    def _render_kernel(self):
        for i, j in self._pixels:
            self._pixels[i, j] = self._trace(i, j)

    @ti.kernel
    def _trace_single(self, i: ti.i32, j: ti.i32) -> ivec3:
        return self._trace(i, j)

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    def render(self) -> GraphicsContext:
        """Render all pixels in parallel and copy them into the context buffer.

        Returns:
            The context, with its buffer filled.
        """
        self._logger.info(
            "Rendering %dx%d (taichi, %d spheres, %d planes)",
            self.width,
            self.height,
            self._num_spheres[None],
            self._num_planes[None],
        )
        start = time.perf_counter()
        self._render_kernel()
        ti.sync()
        self.context.blit_columns(self._pixels.to_numpy())
        self._logger.info("Taichi render finished in %.3fs", time.perf_counter() - start)
        return self.context

    def render_pixel(self, x: int, y: int) -> Color:
        """Trace a single pixel without touching the output buffer."""
        r, g, b = self._trace_single(x, y)
        return (int(r), int(g), int(b))

    def __repr__(self) -> str:
        return f"Renderer(width={self.width}, height={self.height})"


def render_taichi(
    context: GraphicsContext,
    scene: Scene,
    *,
    light_name: Optional[str] = None,
    background: Color = BACKGROUND_COLOR,
) -> GraphicsContext:
    """Convenience wrapper: build a Renderer and render once."""
    return Renderer(context, scene, light_name=light_name, background=background).render()
