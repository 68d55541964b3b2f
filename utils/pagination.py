def paginate_queryset(query, page, page_size, base_url, schema):
    total = query.count()
    skip = (page - 1) * page_size
    records = query.offset(skip).limit(page_size).all()

    next_url = None
    prev_url = None

    if skip + page_size < total:
        next_url = f"{base_url}?page={page + 1}&page_size={page_size}"
    if page > 1:
        prev_url = f"{base_url}?page={page - 1}&page_size={page_size}"

    return {
        "count": total,
        "next": next_url,
        "previous": prev_url,
        "results": [schema.model_validate(record) for record in records]
    }
