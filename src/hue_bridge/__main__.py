from __future__ import annotations

from hue_bridge.pair_tool import main


if __name__ == "__main__":
    main()
