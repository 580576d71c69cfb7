"""Schematic layout stages — design, placer, router, export.

Each stage consumes the previous stage's output.  The stages in order:

  design   — components and nets from the data-generation step
  placer   — flow layout of component bodies on the grid
  router   — Manhattan wires between pins, avoiding bodies
  export   — CAD files from placements and routes

``session.LayoutSession`` ties placer and router together with cached,
version-keyed routing; ``view.ViewTransform`` holds pan/zoom.
"""
