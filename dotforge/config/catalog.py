from .types import Catalog, RepoSpec

DEFAULT_BASE_URL = "https://github.com/erffy-dots"

# config dir name -> "repo" or "repo:branch"
_DEFAULT_ENTRIES = {
    "alacritty": "alacritty",
    "fish": "fish",
    "fastfetch": "fastfetch",
    "hypr": "hyprland",
    "nvim": "nvim",
    "qt6ct": "qt6ct",
    "rofi": "rofi",
    "starship": "starship",
    "swaync": "swaync",
    "waybar": "waybar",
    "wlogout": "wlogout",
    "xdg-desktop-portal": "xdp",
    "gtk-3.0": "gtk:gtk-3.0",
    "gtk-4.0": "gtk:gtk-4.0",
}


def default_catalog() -> Catalog:
    return Catalog(
        {name: RepoSpec.parse(name, value) for name, value in _DEFAULT_ENTRIES.items()}
    )
