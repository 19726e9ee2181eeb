"""Game entry point"""

from tritium_defense.game import main

if __name__ == "__main__":
    main()
