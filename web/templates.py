"""
HTML templates for the web interface.

Templates are stored as string constants to keep the application self-contained.
"""

INDEX_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Image Smoothing Filter</title>
    <style>
        * {
            margin: 0;
            padding: 0;
            box-sizing: border-box;
        }

        body {
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, Oxygen, Ubuntu, sans-serif;
            background: linear-gradient(135deg, #eff6ff 0%, #e0e7ff 100%);
            min-height: 100vh;
            color: #111827;
        }

        .container {
            max-width: 720px;
            margin: 0 auto;
            padding: 40px 20px;
        }

        h1 {
            font-size: 2rem;
            margin-bottom: 8px;
        }

        .subtitle {
            color: #4b5563;
            margin-bottom: 24px;
        }

        form {
            background: #fff;
            border-radius: 12px;
            padding: 24px;
            box-shadow: 0 4px 12px rgba(0, 0, 0, 0.08);
        }

        .field {
            margin-bottom: 16px;
        }

        label {
            display: block;
            font-weight: 600;
            margin-bottom: 6px;
        }

        .hint {
            font-size: 0.85rem;
            color: #6b7280;
        }

        button {
            background: #2563eb;
            color: #fff;
            border: none;
            border-radius: 8px;
            padding: 10px 20px;
            font-size: 1rem;
            cursor: pointer;
        }
    </style>
</head>
<body>
    <div class="container">
        <h1>Image Smoothing Filter</h1>
        <p class="subtitle">Neighborhood averaging with optional grayscale conversion.</p>

        <form action="/api/process" method="post" enctype="multipart/form-data">
            <div class="field">
                <label for="image">Image</label>
                <input type="file" id="image" name="image" accept="image/*" required>
                <p class="hint">Maximum size {{ max_upload_label }}.</p>
            </div>

            <div class="field">
                <label>
                    <input type="checkbox" name="grayscale" value="true">
                    Convert to grayscale first
                </label>
            </div>

            <div class="field">
                <label for="kernel_size">Neighborhood size</label>
                <select id="kernel_size" name="kernel_size">
                    {% for option in options %}
                    <option value="{{ option.value }}" {% if option.value == default_kernel_size %}selected{% endif %}>
                        {{ option.label }} - {{ option.description }}
                    </option>
                    {% endfor %}
                </select>
            </div>

            <button type="submit">Process &amp; download</button>
        </form>
    </div>
</body>
</html>
"""
