MOCK_LIKES = [
    {"id": "like-1", "entity_type": "project", "entity_id": "project-1", "user_id": "user-2", "created_at": "2024-01-20T00:00:00Z"},
    {"id": "like-2", "entity_type": "project", "entity_id": "project-1", "user_id": "user-3", "created_at": "2024-01-21T00:00:00Z"},
    {"id": "like-3", "entity_type": "project", "entity_id": "project-2", "user_id": "user-2", "created_at": "2024-02-05T00:00:00Z"},
    {"id": "like-4", "entity_type": "project", "entity_id": "project-2", "user_id": "user-3", "created_at": "2024-02-06T00:00:00Z"},
    {"id": "like-5", "entity_type": "project", "entity_id": "project-4", "user_id": "user-2", "created_at": "2024-03-05T00:00:00Z"},
    {"id": "like-6", "entity_type": "blog", "entity_id": "blog-1", "user_id": "user-3", "created_at": "2024-01-12T00:00:00Z"},
    {"id": "like-7", "entity_type": "blog", "entity_id": "blog-1", "user_id": "user-1", "created_at": "2024-01-13T00:00:00Z"},
    {"id": "like-8", "entity_type": "blog", "entity_id": "blog-2", "user_id": "user-3", "created_at": "2024-02-07T00:00:00Z"},
]
