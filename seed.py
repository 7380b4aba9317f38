from campaign_admin import create_app, db
from campaign_admin.seed import seed_demo_data

app = create_app({"SEED_DEMO_DATA": False, "PROGRAMS_IMPORT_PATH": None})
with app.app_context():
    if seed_demo_data(db.session):
        print("Seeded demo data.")
    else:
        print("Campaigns already present, nothing seeded.")
