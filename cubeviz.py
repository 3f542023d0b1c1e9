# cubeviz.py
import logging

import pygame as pg

from audio_input import AudioSource
from band_extract import extract_bands
from solid_render import SceneRenderer
from solid_set import create_objects, update_objects

logger = logging.getLogger(__name__)

W, H = 800, 600
FPS = 60
CAPTION = "cubeviz • audio-reactive wireframes"


class AppContext:
    """Everything one visualizer session owns; built once, closed once."""
    def __init__(self, screen, clock, renderer, audio, objects):
        self.screen = screen
        self.clock = clock
        self.renderer = renderer
        self.audio = audio
        self.objects = objects
        self.running = True
        self.frames = 0

    def close(self):
        try:
            if self.audio:
                self.audio.close()
        finally:
            pg.quit()


def create_context(width=W, height=H):
    pg.init()
    screen = pg.display.set_mode((width, height), pg.RESIZABLE)
    pg.display.set_caption(CAPTION)
    return AppContext(
        screen=screen,
        clock=pg.time.Clock(),
        renderer=SceneRenderer(width, height),
        audio=AudioSource(),
        objects=create_objects(),
    )


def handle_events(ctx):
    for e in pg.event.get():
        if e.type == pg.QUIT or (e.type == pg.KEYDOWN and e.key == pg.K_ESCAPE):
            ctx.running = False
        elif e.type == pg.VIDEORESIZE:
            ctx.renderer.resize(e.w, e.h)
            ctx.screen = pg.display.get_surface()


def frame(ctx):
    """audio -> bands -> objects -> draw. Returns the bands used."""
    bands = extract_bands(ctx.audio.get_frequency_frame())
    update_objects(ctx.objects, bands)
    ctx.renderer.draw(ctx.screen, ctx.objects)
    ctx.frames += 1
    return bands


def run(ctx):
    while ctx.running:
        handle_events(ctx)
        if not ctx.running:
            break
        frame(ctx)
        pg.display.flip()
        ctx.clock.tick(FPS)
    logger.info(f"[cubeviz] stopped after {ctx.frames} frames")


def main():
    logging.basicConfig(level=logging.INFO)
    ctx = create_context()
    try:
        run(ctx)
    finally:
        ctx.close()


if __name__ == "__main__":
    main()
