MOCK_COMMENTS = [
    {"id": "comment-1", "entity_type": "project", "entity_id": "project-1", "user_id": "user-2",
     "content": "Great project! The e-commerce features are really well implemented.", "created_at": "2024-01-20T00:00:00Z"},
    {"id": "comment-2", "entity_type": "project", "entity_id": "project-1", "user_id": "user-3",
     "content": "Love the UI design. Very clean and modern!", "created_at": "2024-01-21T00:00:00Z"},
    {"id": "comment-3", "entity_type": "project", "entity_id": "project-2", "user_id": "user-2",
     "content": "The real-time updates work flawlessly. Impressive work!", "created_at": "2024-02-05T00:00:00Z"},
    {"id": "comment-4", "entity_type": "blog", "entity_id": "blog-1", "user_id": "user-3",
     "content": "Very helpful tutorial! Thanks for sharing.", "created_at": "2024-01-12T00:00:00Z"},
    {"id": "comment-5", "entity_type": "blog", "entity_id": "blog-1", "user_id": "user-1",
     "content": "Great introduction to React. Well explained!", "created_at": "2024-01-13T00:00:00Z"},
    {"id": "comment-6", "entity_type": "blog", "entity_id": "blog-2", "user_id": "user-3",
     "content": "These TypeScript tips are gold. Using them in my project now.", "created_at": "2024-02-07T00:00:00Z"},
]
