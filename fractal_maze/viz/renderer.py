import pygame
from typing import Optional, Tuple
from fractal_maze.core.maze import Maze
from fractal_maze.algo.base import Generator

class Renderer:
    COLOR_BG = (10, 10, 10)
    COLOR_WALL = (200, 200, 200)
    COLOR_OPEN = (60, 100, 160)
    COLOR_START = (40, 180, 80)
    COLOR_END = (220, 30, 30)

    def __init__(self, maze: Maze, generator: Optional[Generator] = None, width=1280, height=720):
        self.generator = generator
        # Watch the generator's target while it is being built
        self.maze = generator.maze if generator is not None else maze
        self.screen_width = width
        self.screen_height = height

        # Camera
        self.cell_size = 20.0  # Pixels per cell
        self.offset_x = 0.0
        self.offset_y = 0.0
        self.zoom_speed = 1.1

        self.font = None
        self.running = True
        self.clock = None
        self.surface = None
        self.gen_iter = None
        self.gen_finished = generator is None
        self.status = "Done" if generator is None else "Running"

    def fit_to_screen(self):
        """Auto-adjust zoom and pan to fit the entire maze on screen with padding."""
        padding = 40
        available_w = self.screen_width - (padding * 2)
        available_h = self.screen_height - (padding * 2)

        zoom_x = available_w / max(1, self.maze.width)
        zoom_y = available_h / max(1, self.maze.height)
        self.cell_size = min(zoom_x, zoom_y)

        total_maze_w = self.maze.width * self.cell_size
        total_maze_h = self.maze.height * self.cell_size
        self.offset_x = (self.screen_width - total_maze_w) / 2
        self.offset_y = (self.screen_height - total_maze_h) / 2

    def world_to_screen(self, wx, wy) -> Tuple[float, float]:
        sx = wx * self.cell_size + self.offset_x
        sy = wy * self.cell_size + self.offset_y
        return sx, sy

    def screen_to_world(self, sx, sy) -> Tuple[int, int]:
        wx = (sx - self.offset_x) / self.cell_size
        wy = (sy - self.offset_y) / self.cell_size
        return int(wx), int(wy)

    def visible_range(self) -> Tuple[int, int, int, int]:
        """Cell range (start_x, start_y, end_x, end_y) on screen, clamped to the maze."""
        start_x = max(0, int((-self.offset_x) / self.cell_size))
        start_y = max(0, int((-self.offset_y) / self.cell_size))
        end_x = min(self.maze.width, int((self.screen_width - self.offset_x) / self.cell_size) + 1)
        end_y = min(self.maze.height, int((self.screen_height - self.offset_y) / self.cell_size) + 1)
        return start_x, start_y, end_x, end_y

    def init_window(self):
        pygame.init()
        pygame.display.set_caption(f"Fractal Maze - {self.maze.width}x{self.maze.height}")
        self.surface = pygame.display.set_mode((self.screen_width, self.screen_height), pygame.RESIZABLE)
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("Consolas", 16)
        self.fit_to_screen()

    def handle_input(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False

            elif event.type == pygame.VIDEORESIZE:
                self.screen_width, self.screen_height = event.w, event.h

            elif event.type == pygame.KEYDOWN and event.key == pygame.K_f:
                self.fit_to_screen()

            elif event.type == pygame.MOUSEWHEEL:
                # Zoom towards mouse
                mx, my = pygame.mouse.get_pos()
                wx = (mx - self.offset_x) / self.cell_size
                wy = (my - self.offset_y) / self.cell_size

                if event.y > 0:
                    self.cell_size *= self.zoom_speed
                else:
                    self.cell_size /= self.zoom_speed
                self.cell_size = max(0.001, min(100.0, self.cell_size))

                # Keep the point under the mouse fixed
                self.offset_x = mx - wx * self.cell_size
                self.offset_y = my - wy * self.cell_size

            elif event.type == pygame.MOUSEMOTION:
                if pygame.mouse.get_pressed()[0] or pygame.mouse.get_pressed()[2]:
                    self.offset_x += event.rel[0]
                    self.offset_y += event.rel[1]

    def draw_maze(self):
        self.surface.fill(self.COLOR_BG)
        maze = self.maze
        start_x, start_y, end_x, end_y = self.visible_range()
        size = int(self.cell_size) + 1
        draw_walls = self.cell_size > 4.0

        # Pass 1: cell fills
        for y in range(start_y, end_y):
            for x in range(start_x, end_x):
                key = y * maze.width + x
                if key == maze.end_key:
                    color = self.COLOR_END
                elif key == maze.start_key:
                    color = self.COLOR_START
                elif maze.cell(key).is_inactive():
                    continue
                else:
                    color = self.COLOR_OPEN
                px, py = self.world_to_screen(x, y)
                pygame.draw.rect(self.surface, color, (int(px), int(py), size, size))

        # Pass 2: walls, each drawn once from the cell that stores it
        if draw_walls:
            for y in range(start_y, end_y):
                for x in range(start_x, end_x):
                    key = y * maze.width + x
                    px, py = self.world_to_screen(x, y)
                    px, py = int(px), int(py)

                    if maze.has_wall_at(key, Maze.NORTH):
                        pygame.draw.line(self.surface, self.COLOR_WALL, (px, py), (px + size, py), 1)
                    if maze.has_wall_at(key, Maze.WEST):
                        pygame.draw.line(self.surface, self.COLOR_WALL, (px, py), (px, py + size), 1)
                    if y == maze.height - 1:
                        pygame.draw.line(self.surface, self.COLOR_WALL, (px, py + size), (px + size, py + size), 1)
                    if x == maze.width - 1:
                        pygame.draw.line(self.surface, self.COLOR_WALL, (px + size, py), (px + size, py + size), 1)

    def draw_hud(self):
        fps = int(self.clock.get_fps())
        cells = self.maze.width * self.maze.height
        info = [
            f"FPS: {fps}",
            f"Size: {self.maze.width}x{self.maze.height} ({cells:,})",
            f"Zoom: {self.cell_size:.2f}",
            f"Status: {self.status}",
        ]
        for i, text in enumerate(info):
            lbl = self.font.render(text, True, (255, 255, 255))
            self.surface.blit(lbl, (10, 10 + i * 20))

    def run_loop(self):
        if self.generator and self.gen_iter is None:
            self.gen_iter = self.generator.run()

        while self.running:
            self.handle_input()

            # Step the generator a batch per frame
            if self.gen_iter and not self.gen_finished:
                try:
                    for _ in range(50):
                        self.status = next(self.gen_iter)
                except StopIteration:
                    self.gen_finished = True
                    self.status = "Done"

            self.draw_maze()
            self.draw_hud()
            pygame.display.flip()
            self.clock.tick(60)

        pygame.quit()

    def finish(self):
        """Run whatever the window left of the generator to completion."""
        if self.gen_finished:
            return
        if self.gen_iter is None:
            self.generator.run_all()
        else:
            for _ in self.gen_iter:
                pass
        self.gen_finished = True
        self.status = "Done"
