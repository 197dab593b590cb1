"""Command-line entry point and the game window."""

from __future__ import annotations

import math
import os
import sys
from collections.abc import Sequence

from cubscape.image import Image, load_png, texture_to_image
from cubscape.mapfile import SceneError
from cubscape.movement import Action, apply_actions
from cubscape.pixels import GraphicsError
from cubscape.raycast import cast_rays
from cubscape.scene import SCREEN_HEIGHT, SCREEN_WIDTH, Scene, load_scene
from cubscape.validate import is_valid_filename

SUCCESS = 0
FAILURE = 1
WINDOW_TITLE = "cub3D"

WRONG_ARGS_MSG = "Usage: cubscape <scene.cub>"
NO_CUB_MSG = "The scene file must have a .cub extension"
TEXTURE_LOADING_ERROR = "Failed to load the wall textures"
WINDOW_ERROR = "Failed to open the window"

SIDES = ("north", "south", "west", "east")


def prepare(argv: Sequence[str]) -> Scene:
    """Check the arguments and load the scene named by the only one."""
    args = list(argv)
    if len(args) != 1:
        raise SceneError(WRONG_ARGS_MSG)
    if not is_valid_filename(args[0]):
        raise SceneError(NO_CUB_MSG)
    return load_scene(args[0])


def load_textures(scene: Scene) -> dict[str, Image]:
    """Load the four wall textures of a scene as images, keyed by side."""
    paths = {
        "north": scene.map.north_texture,
        "south": scene.map.south_texture,
        "west": scene.map.west_texture,
        "east": scene.map.east_texture,
    }
    if any(path is None for path in paths.values()):
        raise SceneError(TEXTURE_LOADING_ERROR)
    try:
        return {side: texture_to_image(load_png(path)) for side, path in paths.items()}
    except GraphicsError as exc:
        raise SceneError(TEXTURE_LOADING_ERROR) from exc


def _rgb(color: int) -> tuple[int, int, int]:
    return (color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF


def _draw_frame(pygame, screen, scene: Scene, wall) -> None:
    half = SCREEN_HEIGHT // 2
    screen.fill(_rgb(scene.ceiling_color), (0, 0, SCREEN_WIDTH, half))
    screen.fill(_rgb(scene.floor_color), (0, half, SCREEN_WIDTH, SCREEN_HEIGHT - half))
    wall_width, wall_height = wall.get_size()
    for ray in cast_rays(scene):
        if not math.isfinite(ray.height) or ray.height <= 0:
            continue
        top = max(0, int(ray.start))
        bottom = min(SCREEN_HEIGHT, int(ray.end))
        if bottom <= top:
            continue
        column = wall.subsurface((ray.index % wall_width, 0, 1, wall_height))
        screen.blit(pygame.transform.scale(column, (1, bottom - top)), (ray.index, top))


def run_window(scene: Scene) -> None:
    """Open the game window and run it until it is closed or Escape is pressed."""
    os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
    import pygame

    pygame.init()
    try:
        try:
            screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
        except pygame.error as exc:
            raise SceneError(WINDOW_ERROR) from exc
        pygame.display.set_caption(WINDOW_TITLE)
        textures = load_textures(scene)
        north = textures["north"]
        wall = pygame.image.frombuffer(
            bytes(north.pixels), (north.width, north.height), "RGBA"
        )
        key_actions = {
            pygame.K_w: Action.FORWARD,
            pygame.K_s: Action.BACKWARD,
            pygame.K_a: Action.STRAFE_LEFT,
            pygame.K_d: Action.STRAFE_RIGHT,
            pygame.K_LEFT: Action.TURN_LEFT,
            pygame.K_RIGHT: Action.TURN_RIGHT,
        }
        pygame.key.set_repeat(200, 30)
        clock = pygame.time.Clock()
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                        break
                    pressed = pygame.key.get_pressed()
                    actions = [action for key, action in key_actions.items() if pressed[key]]
                    apply_actions(scene, actions)
            if running:
                _draw_frame(pygame, screen, scene, wall)
                pygame.display.flip()
                clock.tick(60)
    finally:
        pygame.quit()


def main(argv: Sequence[str] | None = None) -> int:
    """Run the game on the scene file given on the command line."""
    args = sys.argv[1:] if argv is None else argv
    try:
        scene = prepare(args)
        run_window(scene)
    except SceneError as exc:
        print(exc, file=sys.stderr)
        return FAILURE
    return SUCCESS


if __name__ == "__main__":
    sys.exit(main())