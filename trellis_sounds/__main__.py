from trellis_sounds.cli import main

if __name__ == "__main__":
    main()
