"""Python implementation of a single-bounce ray caster.

This package renders still images by casting one ray per pixel through a
scene of analytic primitives and shading the selected hit with a point light.

Subpackages:
    core: Ray/RayHit data structures, vector helpers and rigid transforms
    camera: Projections and the graphics context (pixel <-> ray conversion)
    geometry: Shape primitives (sphere, plane) and point lights
    scene: Named shape/light registry, hit selection and shading
    render: Pure-Python reference renderer and the Taichi kernel renderer
    preview: Image buffer, PNG export, matplotlib preview and debug overlay
"""

__version__ = "0.1.0"
