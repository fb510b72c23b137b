"""
Seed a few users, jobs, and applications so /notifications/preview has something to show.

Usage:
  python -m scripts.seed_demo
"""
from core.database import create_application, create_job, create_user, init_db

# Make sure DB + tables exist
init_db()

demo_users = [
    ("ada@example.com", "Ada", "premium"),
    ("grace@example.com", "Grace", "premium"),
    ("linus@example.com", "Linus", "free"),
    ("ken@example.com", "Ken", "free"),
    ("barbara@example.com", "Barbara", "ultra"),
]
user_ids = [create_user(email, name=name, tier=tier) for email, name, tier in demo_users]
print(f"Created {len(user_ids)} users: {user_ids}")

backend_job = create_job("Backend Engineer", company="Acme", location="Remote", url="https://example.com/jobs/1")
data_job = create_job("Data Analyst", company="Acme", location="London", url="https://example.com/jobs/2")
print(f"Created jobs: {backend_job}, {data_job}")

for uid in user_ids[:3]:
    create_application(uid, backend_job)
for uid in user_ids[1:4]:
    create_application(uid, data_job)
print("Applications created. Try:")
print(f'  curl -X POST localhost:8000/notifications/preview -d \'{{"jobIds": [{backend_job}, {data_job}]}}\'')
