from campaign_admin import create_app

app = create_app()

if __name__ == "__main__":
    # Tables are created by create_app; seed/import are governed by .env
    app.run(debug=True)
