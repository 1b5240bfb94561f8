"""Vispy-based 3D visualization of the generated galaxy."""

import time

# Set Vispy backend
# Use glfw on macOS for better OpenGL compatibility, pyglet elsewhere
import platform
import vispy

if platform.system() == 'Darwin':
    vispy.use('glfw', gl='gl2')
else:
    vispy.use('pyglet')

from vispy import app, scene
from vispy.scene import visuals
from typing import Optional, Dict, Any

from ..config import (
    CAMERA_AZIMUTH,
    CAMERA_DISTANCE,
    CAMERA_ELEVATION,
    CAMERA_FOV,
    HELP_CONTENT,
    WINDOW_SIZE,
)
from ..controls.panel import ParameterPanel
from ..errors import InvalidParameter
from ..generation.galaxy import GeneratedGalaxy
from ..generation.generators import GalaxyGenerator
from ..state.parameters import GalaxyParameters
from ..state.persistence import save_galaxy_preset
from .colors import colors_to_rgba

CAMERA_KEYS = ('center', 'azimuth', 'elevation', 'distance')


class GalaxyVisualizer:
    """Interactive point-cloud view of a generated galaxy."""

    def __init__(
        self,
        params: GalaxyParameters,
        generator: Optional[GalaxyGenerator] = None,
        initial_camera: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize the visualizer.

        Args:
            params: Parameters edited by the keyboard panel
            generator: Galaxy generator (a verbose one is created if None).
                Its on_dispose hook is left untouched.
            initial_camera: Optional initial camera state from a loaded preset
        """
        self.params = params
        self.panel = ParameterPanel(params)
        self.generator = generator or GalaxyGenerator(verbose=True)
        self.initial_camera = initial_camera

        self.canvas = scene.SceneCanvas(
            keys='interactive',
            title='Spiral Galaxy Generator',
            size=WINDOW_SIZE,
            show=True,
            bgcolor='black',
            vsync=True,
        )
        self.view = self.canvas.central_widget.add_view()
        self.view.camera = scene.TurntableCamera(fov=CAMERA_FOV)
        self._reset_camera()

        # Markers visual of the live galaxy; detached when that galaxy is disposed
        self.points: Optional[visuals.Markers] = None
        self._color_mode = True

        self.status_text = scene.visuals.Text(
            text='',
            color='white',
            anchor_x='left',
            anchor_y='bottom',
            font_size=12,
            parent=self.canvas.scene,
        )
        self.status_text.pos = (10, 10)

        self.help_text = scene.visuals.Text(
            text=HELP_CONTENT,
            color='white',
            anchor_x='left',
            anchor_y='top',
            font_size=12,
            parent=self.canvas.scene,
        )
        self.help_text.pos = (10, self.canvas.size[1] - 10)
        self.help_text.visible = False

        self.regenerate()

        # Polls the settle trigger; regeneration happens here, never per key press
        self.timer = app.Timer(interval=1 / 30, connect=self._on_timer, start=True)
        self.canvas.events.key_press.connect(self._on_key_press)

    def _reset_camera(self):
        """Move the camera to the loaded preset view, or the default one."""
        state = {
            'center': (0, 0, 0),
            'azimuth': CAMERA_AZIMUTH,
            'elevation': CAMERA_ELEVATION,
            'distance': CAMERA_DISTANCE,
        }
        state.update(self.initial_camera or {})
        camera = self.view.camera
        camera.center = tuple(state['center'])
        camera.azimuth = state['azimuth']
        camera.elevation = state['elevation']
        camera.distance = state['distance']

    def _get_camera_state(self) -> Dict[str, Any]:
        camera = self.view.camera
        state = {key: getattr(camera, key) for key in CAMERA_KEYS}
        state['center'] = [float(c) for c in state['center']]
        return state

    def _set_points_data(self, points, galaxy: GeneratedGalaxy):
        points.set_data(
            galaxy.positions_xyz,
            edge_width=0,
            face_color=colors_to_rgba(galaxy.colors_rgb, white=not self._color_mode),
            size=galaxy.parameters.size,
            symbol='disc',
        )

    def _upload(self, galaxy: GeneratedGalaxy):
        """Show a galaxy as a point cloud that leaves the scene with the galaxy."""
        if galaxy.count == 0:
            return
        points = visuals.Markers(scaling=True)
        # Additive blending without depth writes: overlapping particles add up
        points.set_gl_state('additive', depth_test=True, depth_mask=False)
        self._set_points_data(points, galaxy)
        self.view.add(points)
        self.points = points

        def detach(disposed: GeneratedGalaxy):
            points.parent = None
            if self.points is points:
                self.points = None

        galaxy.add_dispose_callback(detach)

    def regenerate(self):
        """Generate a new galaxy from the current parameters and show it."""
        start = time.perf_counter()
        try:
            galaxy = self.generator.generate(self.params)
        except InvalidParameter as e:
            print(f"Generation failed: {e}")
            return
        self._upload(galaxy)
        elapsed = time.perf_counter() - start
        print(f"Galaxy ready: {galaxy.count} particles in {elapsed:.2f} s")
        self._update_status()

    def _update_status(self):
        galaxy = self.generator.current
        count = galaxy.count if galaxy is not None else 0
        pending = "  (pending)" if self.panel.trigger.pending else ""
        self.status_text.text = (
            f"Particles: {count}  |  Branches: {self.params.branches}\n"
            f"> {self.panel.describe()}{pending}"
        )

    def _on_timer(self, event):
        if self.panel.settled():
            self.regenerate()

    def _on_key_press(self, event):
        """Handle keyboard input."""
        key = event.key
        if key == 'Q':
            print("Quit requested...")
            self.close()
            return
        elif key == 'Tab':
            self.panel.select_next()
        elif key == 'Up':
            self.panel.increase()
        elif key == 'Down':
            self.panel.decrease()
        elif key == 'G':
            self.panel.trigger.cancel()
            self.regenerate()
        elif key == 'Z':
            self.panel.reset()
            print("Parameters reset to defaults")
        elif key == 'S':
            print("Saving parameter preset...")
            try:
                filepath = save_galaxy_preset(self.params, self._get_camera_state())
                print(f"Saved to: {filepath}")
            except Exception as e:
                print(f"Save failed: {e}")
        elif key == 'R':
            self._reset_camera()
        elif key == 'F':
            self.canvas.fullscreen = not self.canvas.fullscreen
        elif key == 'C':
            self._color_mode = not self._color_mode
            galaxy = self.generator.current
            if galaxy is not None and self.points is not None:
                self._set_points_data(self.points, galaxy)
        elif key == 'H':
            self.help_text.visible = not self.help_text.visible

        self._update_status()
        self.canvas.update()

    def close(self):
        """Close the visualizer and release the live galaxy."""
        self.timer.stop()
        self.generator.dispose()
        self.canvas.close()
        app.quit()

    def run(self):
        """Run the visualization event loop."""
        app.run()


def run_visualization(
    params: GalaxyParameters,
    seed: Optional[int] = None,
    initial_camera: Optional[Dict[str, Any]] = None,
):
    """
    Run the visualization (main entry point).

    Args:
        params: Initial galaxy parameters
        seed: Random seed for reproducibility
        initial_camera: Optional initial camera state from a loaded preset
    """
    generator = GalaxyGenerator(seed=seed, verbose=True)
    visualizer = GalaxyVisualizer(params, generator, initial_camera)
    visualizer.run()
