from src.invention_station.invention_station.main import create_app

app = create_app()

if __name__ == "__main__":
    app.run(debug=app.debug)
