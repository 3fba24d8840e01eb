from precommit_gate.cli import main

if __name__ == "__main__":
    main()
