from streamstack.config_model.model import load_config
cfg = load_config()  # reads config/config.toml by default
print("Project:", cfg.env.project_name)
print("Baseline:", cfg.graph.baseline)
print("Animation:", f"{cfg.graph.duration_ms:.0f} ms, tick every {cfg.graph.tick_ms:.0f} ms")
print("Viewport:", f"{cfg.viewport.width}x{cfg.viewport.height}")
print()
print(cfg.to_toml())
