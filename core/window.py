import glfw


class AppWindow:
    """GLFW window with a current OpenGL context and input callbacks.

    Callbacks receive plain values: on_key(key, mods), on_click(x, y),
    on_cursor(x, y). Cursor coordinates are in framebuffer pixels so they
    match the rendered frame on high-DPI displays.
    """

    def __init__(self, width: int = 1280, height: int = 800, title: str = "GPT Walkthrough",
                 visible: bool = True):
        if not glfw.init():
            raise RuntimeError("Failed to initialize GLFW")
        glfw.window_hint(glfw.RESIZABLE, glfw.FALSE)
        glfw.window_hint(glfw.VISIBLE, glfw.TRUE if visible else glfw.FALSE)
        self.window = glfw.create_window(width, height, title, None, None)
        if not self.window:
            glfw.terminate()
            raise RuntimeError("Failed to create GLFW window")
        glfw.make_context_current(self.window)
        glfw.swap_interval(1)

        self.on_key = None
        self.on_click = None
        self.on_cursor = None
        glfw.set_key_callback(self.window, self._key_callback)
        glfw.set_mouse_button_callback(self.window, self._mouse_button_callback)
        glfw.set_cursor_pos_callback(self.window, self._cursor_callback)

    def _to_framebuffer(self, x, y):
        win_w, win_h = glfw.get_window_size(self.window)
        fb_w, fb_h = glfw.get_framebuffer_size(self.window)
        return x * fb_w / max(win_w, 1), y * fb_h / max(win_h, 1)

    def _key_callback(self, window, key, scancode, action, mods):
        if action == glfw.PRESS and self.on_key is not None:
            self.on_key(key, mods)

    def _mouse_button_callback(self, window, button, action, mods):
        if button == glfw.MOUSE_BUTTON_LEFT and action == glfw.PRESS and self.on_click:
            x, y = glfw.get_cursor_pos(window)
            self.on_click(*self._to_framebuffer(x, y))

    def _cursor_callback(self, window, x, y):
        if self.on_cursor is not None:
            self.on_cursor(*self._to_framebuffer(x, y))

    def set_title(self, title: str):
        glfw.set_window_title(self.window, title)

    def get_framebuffer_size(self):
        return glfw.get_framebuffer_size(self.window)

    def get_time(self) -> float:
        return glfw.get_time()

    def should_close(self) -> bool:
        return glfw.window_should_close(self.window)

    def close(self):
        glfw.set_window_should_close(self.window, True)

    def swap_buffers(self):
        glfw.swap_buffers(self.window)

    def poll_events(self):
        glfw.poll_events()

    def terminate(self):
        glfw.destroy_window(self.window)
        glfw.terminate()
