from gridvault.main import app, run

if __name__ == "__main__":
    run()
