from app.ejama import create_app

app = create_app()
