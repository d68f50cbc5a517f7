from __future__ import annotations

from datetime import date
from typing import Dict

from collabx import models
from collabx.db import Base, engine, session_scope

DEMO_OWNERS = [
    {"id": "demo-priya", "name": "Priya Sharma", "email": "priya@mvgr.edu.in", "skills": ["Python", "React"]},
    {"id": "demo-rahul", "name": "Rahul Verma", "email": "rahul@mvgr.edu.in", "skills": ["React", "Tailwind CSS"]},
    {"id": "demo-ananya", "name": "Ananya Reddy", "email": "ananya@mvgr.edu.in", "skills": ["Arduino", "Python"]},
]


def seed_profiles(db) -> int:
    created = 0
    for data in DEMO_OWNERS:
        if db.get(models.UserProfile, data["id"]) is None:
            db.add(models.UserProfile(role="developer", **data))
            created += 1
    db.flush()
    return created


def seed_projects(db) -> int:
    projects_data = [
        {
            "owner": DEMO_OWNERS[0],
            "title": "AI-Powered Study Assistant",
            "description": "An intelligent chatbot that helps students with coursework using NLP.",
            "domain": "ai",
            "difficulty": "medium",
            "skills_have": ["Python", "React"],
            "skills_need": ["NLP", "FastAPI"],
            "team_size": 4,
            "reference_url": "https://github.com/example/study-assistant",
        },
        {
            "owner": DEMO_OWNERS[1],
            "title": "Campus Event Management System",
            "description": "A full-stack web app for organizing college events with real-time updates.",
            "domain": "web",
            "difficulty": "easy",
            "skills_have": ["React", "Tailwind CSS"],
            "skills_need": ["Node.js", "MongoDB"],
            "team_size": 3,
        },
        {
            "owner": DEMO_OWNERS[2],
            "title": "Smart Attendance System",
            "description": "IoT-based attendance tracking using RFID sensors and a live dashboard.",
            "domain": "iot",
            "difficulty": "hard",
            "skills_have": ["Arduino", "Python"],
            "skills_need": ["ESP32", "React", "MQTT"],
            "team_size": 5,
        },
    ]

    created = 0
    for data in projects_data:
        owner = data.pop("owner")
        project = db.query(models.Project).filter_by(title=data["title"]).first()
        if project is None:
            project = models.Project(
                skills_required=data["skills_have"] + data["skills_need"],
                created_by=owner["id"],
                owner_name=owner["name"],
                status="approved",
                **data,
            )
            project.team.append(
                models.ProjectTeamMember(user_id=owner["id"], user_name=owner["name"], role="owner")
            )
            db.add(project)
            created += 1
    db.flush()
    return created


def seed_faculty(db) -> int:
    faculty_data = [
        {
            "name": "Dr. S. Ramesh",
            "designation": "Professor & HOD",
            "department": "Computer Science & Engineering",
            "domain": "Distributed Systems",
            "email": "ramesh@mvgr.edu.in",
            "skills": "Distributed Systems, Cloud Computing, OS",
            "description": "Heads the CSE department and mentors cloud computing projects.",
        },
        {
            "name": "Dr. Meena K",
            "designation": "Associate Professor",
            "department": "Electronics & Communication",
            "domain": "IoT",
            "email": "meena@mvgr.edu.in",
            "skills": "VLSI, Embedded Systems, IoT",
            "description": "Guides embedded and IoT student teams.",
        },
    ]
    created = 0
    for data in faculty_data:
        if db.query(models.Faculty).filter_by(email=data["email"]).first() is None:
            db.add(models.Faculty(**data))
            created += 1
    db.flush()
    return created


def seed_hackathons(db) -> int:
    hackathons_data = [
        {
            "event_name": "Smart India Hackathon",
            "event_date": date(2026, 12, 5),
            "status": "Upcoming",
            "category": "Open Innovation",
            "format": "Hybrid",
            "joining_url": "https://sih.gov.in",
        },
        {
            "event_name": "Campus AI Sprint",
            "event_date": date(2026, 11, 14),
            "status": "Upcoming",
            "category": "AI/ML",
            "format": "In-Person",
            "joining_url": "https://example.edu/ai-sprint",
        },
    ]
    created = 0
    for data in hackathons_data:
        if db.query(models.Hackathon).filter_by(event_name=data["event_name"]).first() is None:
            db.add(models.Hackathon(created_by="demo-admin", **data))
            created += 1
    db.flush()
    return created


def seed_demo_data() -> Dict[str, int]:
    """Insert whatever demo rows are missing; returns how many were created per table."""
    Base.metadata.create_all(bind=engine)
    with session_scope() as db:
        return {
            "user_profile": seed_profiles(db),
            "project": seed_projects(db),
            "faculty": seed_faculty(db),
            "hackathon": seed_hackathons(db),
        }


if __name__ == "__main__":
    print(f"Demo data seeded: {seed_demo_data()}")
