"""
Default data for a fresh local database.
"""

DEFAULT_ARTICLES = [
    {
        'title': 'रामपुर में नई सड़क परियोजना को मंजूरी',
        'slug': 'rampur-new-road-project-approved',
        'category': 'rampur',
        'excerpt': 'जिला प्रशासन ने शहर के मुख्य मार्ग के चौड़ीकरण को मंजूरी दी।',
        'content': '<p>रामपुर जिला प्रशासन ने शहर के मुख्य मार्ग के चौड़ीकरण की परियोजना को मंजूरी दे दी है।'
                   ' काम अगले महीने शुरू होगा।</p>',
        'author': 'रामपुर न्यूज़ डेस्क',
        'status': 'published',
        'featured': True,
        'views': 1250,
        'tags': ['रामपुर', 'विकास'],
        'publishedDate': '2024-06-01T08:00:00Z',
    },
    {
        'title': 'यूपी बोर्ड परीक्षा परिणाम घोषित',
        'slug': 'up-board-results-declared',
        'category': 'education-jobs',
        'excerpt': 'हाईस्कूल और इंटरमीडिएट के परिणाम आधिकारिक वेबसाइट पर उपलब्ध।',
        'content': '<p>उत्तर प्रदेश माध्यमिक शिक्षा परिषद ने हाईस्कूल और इंटरमीडिएट के परिणाम घोषित कर दिए हैं।</p>',
        'author': 'शिक्षा संवाददाता',
        'status': 'published',
        'breaking': True,
        'views': 4300,
        'tags': ['यूपी बोर्ड', 'परिणाम'],
        'publishedDate': '2024-06-02T10:30:00Z',
    },
    {
        'title': 'रामपुर पुलिस ने चोरी के मामले का खुलासा किया',
        'slug': 'rampur-police-solve-theft-case',
        'category': 'crime',
        'excerpt': 'पुलिस ने दो आरोपियों को गिरफ्तार कर चोरी का सामान बरामद किया।',
        'content': '<p>रामपुर पुलिस ने बाजार में हुई चोरी के मामले में दो आरोपियों को गिरफ्तार किया।</p>',
        'author': 'अपराध संवाददाता',
        'status': 'published',
        'views': 860,
        'tags': ['पुलिस', 'रामपुर'],
        'publishedDate': '2024-06-03T07:15:00Z',
    },
]

DEFAULT_CONTENT = {
    'exams': [
        {
            'slug': 'up-police-constable-2024',
            'title': 'UP Police Constable Exam',
            'titleHindi': 'यूपी पुलिस कांस्टेबल परीक्षा',
            'organization': 'UPPRPB',
            'organizationHindi': 'उत्तर प्रदेश पुलिस भर्ती बोर्ड',
            'category': 'state',
            'examDate': '2024-08-23',
            'applicationStatus': 'closed',
            'isFeatured': True,
        },
    ],
    'results': [
        {
            'slug': 'up-board-2024-result',
            'title': 'UP Board 10th and 12th Result',
            'titleHindi': 'यूपी बोर्ड 10वीं और 12वीं परिणाम',
            'organization': 'UPMSP',
            'organizationHindi': 'उत्तर प्रदेश माध्यमिक शिक्षा परिषद',
            'category': 'board',
            'resultDate': '2024-06-02',
            'resultStatus': 'declared',
        },
    ],
    'institutions': [
        {
            'slug': 'rampur-raza-degree-college',
            'name': 'Raza Degree College',
            'nameHindi': 'रज़ा डिग्री कॉलेज',
            'type': 'college',
            'city': 'Rampur',
            'district': 'Rampur',
            'state': 'Uttar Pradesh',
        },
    ],
    'holidays': [
        {
            'slug': 'independence-day-2024',
            'name': 'Independence Day',
            'nameHindi': 'स्वतंत्रता दिवस',
            'date': '2024-08-15',
            'type': 'national',
        },
        {
            'slug': 'raksha-bandhan-2024',
            'name': 'Raksha Bandhan',
            'nameHindi': 'रक्षा बंधन',
            'date': '2024-08-19',
            'type': 'religious',
        },
    ],
    'restaurants': [
        {
            'slug': 'nawabi-dastarkhwan',
            'name': 'Nawabi Dastarkhwan',
            'nameHindi': 'नवाबी दस्तरख़्वान',
            'category': 'mughlai',
            'city': 'Rampur',
            'district': 'Rampur',
            'isPopular': True,
        },
    ],
    'places': [
        {
            'slug': 'raza-library',
            'name': 'Raza Library',
            'nameHindi': 'रज़ा लाइब्रेरी',
            'category': 'heritage',
            'city': 'Rampur',
            'district': 'Rampur',
            'isFeatured': True,
        },
    ],
    'events': [
        {
            'slug': 'rampur-mahotsav-2024',
            'title': 'Rampur Mahotsav',
            'titleHindi': 'रामपुर महोत्सव',
            'category': 'cultural',
            'date': '2024-08-25',
            'venue': 'Gandhi Samadhi Ground',
            'venueHindi': 'गांधी समाधि मैदान',
            'city': 'Rampur',
            'district': 'Rampur',
            'status': 'upcoming',
        },
    ],
}
