"""Static video library catalog standing in for the database."""

# Categories in display order
CATEGORIES = [
    {"id": "cat_sales", "name": "Sales", "description": "Sales training and playbooks"},
    {"id": "cat_leadership", "name": "Leadership", "description": "Leadership development"},
    {"id": "cat_product", "name": "Product", "description": "Product walkthroughs"},
]

SUBCATEGORIES = [
    {"id": "sub_prospecting", "name": "Prospecting", "categoryId": "cat_sales"},
    {"id": "sub_closing", "name": "Closing", "categoryId": "cat_sales"},
    {"id": "sub_coaching", "name": "Coaching", "categoryId": "cat_leadership"},
    {"id": "sub_onboarding", "name": "Onboarding", "categoryId": "cat_product"},
    {"id": "sub_roadmap", "name": "Roadmap", "categoryId": "cat_product"},
]

VIDEOS = [
    {
        "id": "vid_001",
        "title": "Cold Calling Basics",
        "description": "Opening lines that keep prospects on the phone",
        "vimeoId": "801001",
        "vimeoDuration": 612,
        "subcategoryId": "sub_prospecting",
        "libraryStatus": "approved",
        "createdAt": "2024-03-01T10:00:00Z",
    },
    {
        "id": "vid_002",
        "title": "Building a Lead List",
        "description": None,
        "vimeoId": "801002",
        "vimeoDuration": 455,
        "subcategoryId": "sub_prospecting",
        "libraryStatus": "approved",
        "createdAt": "2024-03-08T10:00:00Z",
    },
    {
        "id": "vid_003",
        "title": "Prospecting Draft Cut",
        "description": "Unreviewed recording",
        "vimeoId": "801003",
        "vimeoDuration": 390,
        "subcategoryId": "sub_prospecting",
        "libraryStatus": "pending",
        "createdAt": "2024-03-15T10:00:00Z",
    },
    {
        "id": "vid_004",
        "title": "Handling Objections",
        "description": "Turning a no into a not yet",
        "vimeoId": "801004",
        "vimeoDuration": 803,
        "subcategoryId": "sub_closing",
        "libraryStatus": "approved",
        "createdAt": "2024-02-20T10:00:00Z",
    },
    {
        "id": "vid_005",
        "title": "One-on-One Coaching",
        "description": "Structure for weekly check-ins",
        "vimeoId": "801005",
        "vimeoDuration": 1204,
        "subcategoryId": "sub_coaching",
        "libraryStatus": "approved",
        "createdAt": "2024-01-11T10:00:00Z",
    },
    {
        "id": "vid_006",
        "title": "Platform Tour",
        "description": "First login walkthrough",
        "vimeoId": "801006",
        "vimeoDuration": 540,
        "subcategoryId": "sub_onboarding",
        "libraryStatus": "approved",
        "createdAt": "2024-04-02T10:00:00Z",
    },
    {
        "id": "vid_007",
        "title": "Q3 Roadmap Preview",
        "description": "Internal preview, not yet approved",
        "vimeoId": "801007",
        "vimeoDuration": 930,
        "subcategoryId": "sub_roadmap",
        "libraryStatus": "pending",
        "createdAt": "2024-05-19T10:00:00Z",
    },
]

# Profiles keyed by user id
USER_PROFILES = {
    "user_admin": {"id": "profile_1", "roleType": "Admin", "team": "HQ", "area": None, "region": None},
    "user_exec": {"id": "profile_2", "roleType": "Executive", "team": "HQ", "area": None, "region": None},
    "user42": {"id": "profile_3", "roleType": "Rep", "team": "Falcons", "area": "North", "region": "East"},
}

# Roles that see videos regardless of approval status
PRIVILEGED_ROLES = {"Admin", "Executive"}
